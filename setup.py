import setuptools
from setuptools import find_packages
from setuptools.command.build_py import build_py as build_py_orig


class build_py(build_py_orig):
    def find_package_modules(self, package, package_dir):
        modules = super().find_package_modules(package, package_dir)
        return [(pkg, mod, file) for (pkg, mod, file) in modules if not mod.startswith("test_")]


setuptools.setup(
    name="iniread",
    version="0.3.0",
    description="Read-only INI parser with typed value lookups",
    python_requires=">=3.10",
    packages=find_packages(exclude=["test", "test.*"]),
    cmdclass={"build_py": build_py},
    install_requires=[
        "argcomplete",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["iniread=iniread.cli:main"],
    },
)
