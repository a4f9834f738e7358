import argparse
import errno
import sys

# if autocomplete doesn't exist, just do nothing, don't break
try:
    import argcomplete
except Exception:
    argcomplete = None

from iniread.accessors import INTEGER_TYPES, READERS, Status, read_strn
from iniread.config import Config, coerce_to_bool, default_config
from iniread.convert import parse_float, parse_integer
from iniread.document import GLOBAL_SECTION
from iniread.logger import configure_logger, logger
from iniread.parser import load
from iniread.pretty import FORMATTERS
from iniread.version import print_version

EXIT_CODES = {
    Status.FOUND: 0,
    Status.DEFAULT: 1,
    Status.ERROR: 2,
}


class HelpException(Exception):
    pass


class LoadError(IOError):
    pass


def perror(*args, **kwargs):
    print(*args, file=sys.stderr, **kwargs)


class ArgumentParserWithDefaults(argparse.ArgumentParser):
    def add_argument(self, *args, help=None, default=None, **kwargs):
        if help is not None:
            kwargs['help'] = help
        if default is not None and args[0] != '-h':
            kwargs['default'] = default
            if help is not None and help != "==SUPPRESS==":
                kwargs['help'] += f' (default: {default})'
        return super().add_argument(*args, **kwargs)


def init_cli(argv=None, config: Config | None = None):
    """Initialize the iniread CLI and parse command line arguments."""
    if config is None:
        config = default_config()
    parser = create_argument_parser(config)
    configure_subcommands(parser)
    args = parser.parse_args(argv)
    post_parse_setup(args, config)
    return parser, args


def create_argument_parser(config: Config):
    parser = ArgumentParserWithDefaults(
        prog="iniread",
        description="Read values out of INI configuration files.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument("--debug", action="store_true", help="display debug messages")
    verbosity_group.add_argument("--quiet", "-q", dest="quiet", action="store_true", help="reduce output.")
    parser.add_argument(
        "--encoding",
        default=config.encoding,
        help="""text encoding of the INI file.
The INIREAD_ENCODING environment variable modifies default behaviour.""",
    )
    parser.add_argument(
        "--report-malformed",
        dest="report_malformed",
        action="store_true",
        default=config.report_malformed,
        help="warn about lines that are neither section headers nor key=value pairs",
    )
    return parser


def configure_subcommands(parser):
    """Add subcommand parsers to the main argument parser."""
    subparsers = parser.add_subparsers(dest="subcommand")
    subparsers.required = False
    dump_parser(subparsers)
    get_parser(subparsers)
    help_parser(subparsers)
    keys_parser(subparsers)
    sections_parser(subparsers)
    version_parser(subparsers)


def post_parse_setup(args, config: Config):
    if args.debug:
        configure_logger("DEBUG")
    elif config.log_level is not None:
        configure_logger(config.log_level)
    else:
        configure_logger("WARNING")


def load_document(args):
    document = load(args.FILE, encoding=args.encoding, report_malformed=args.report_malformed)
    if document is None:
        raise LoadError(f"failed to load {args.FILE}")
    return document


def get_parser(subparsers):
    parser = subparsers.add_parser("get", help="read a typed value from an INI file")
    parser.add_argument("--section", "-s", help=f"section to read from (default: the {GLOBAL_SECTION} section)")
    parser.add_argument("--type", "-t", dest="type", default="str", choices=sorted(READERS), help="value type")
    parser.add_argument("--default", "-d", dest="default", help="value used when the key is missing")
    parser.add_argument(
        "--size", type=int, help="copy the string into a fixed buffer of SIZE bytes, terminator included"
    )
    parser.add_argument("FILE", help="INI file to read")
    parser.add_argument("KEY", help="key to look up")
    parser.set_defaults(func=get_cli)


def _coerce_default(args):
    if args.default is None or args.type in ("str", "ipv4"):
        return args.default
    if args.type == "bool":
        return coerce_to_bool(args.default)
    if args.type in ("float", "double"):
        return parse_float(args.default, single=args.type == "float")
    bits, signed = INTEGER_TYPES[args.type]
    return parse_integer(args.default, bits, signed)


def get_cli(args):
    if args.size is not None and args.type != "str":
        raise ValueError("--size only applies to --type str")

    with load_document(args) as document:
        if args.size is not None:
            if args.size < 1:
                raise ValueError(f"invalid buffer size: {args.size}")
            result = read_strn(document, args.section, args.KEY, bytearray(args.size), args.default, args.encoding)
        else:
            default = _coerce_default(args)
            kwargs = {"default": default} if default is not None else {}
            result = READERS[args.type](document, args.section, args.KEY, **kwargs)

    logger.debug(f"get {args.KEY}: {result.status.name}")
    if result.status is Status.ERROR:
        perror(f"Error: {result.error}")
    elif result.value is not None:
        value = result.value
        if isinstance(value, bool):
            value = str(value).lower()
        print(value)
    sys.exit(EXIT_CODES[result.status])


def dump_parser(subparsers):
    parser = subparsers.add_parser("dump", help="print every section and entry of an INI file")
    parser.add_argument("--format", dest="format", default="tree", choices=list(FORMATTERS), help="output format")
    parser.add_argument("FILE", help="INI file to read")
    parser.set_defaults(func=dump_cli)


def dump_cli(args):
    with load_document(args) as document:
        output = FORMATTERS[args.format](document)
        if document.skipped and not args.quiet:
            perror(f"{len(document.skipped)} malformed line(s) skipped")
    print(output, end="" if output.endswith("\n") else "\n")


def sections_parser(subparsers):
    parser = subparsers.add_parser("sections", help="list the sections of an INI file")
    parser.add_argument("FILE", help="INI file to read")
    parser.set_defaults(func=sections_cli)


def sections_cli(args):
    with load_document(args) as document:
        for name in document:
            print(name)


def keys_parser(subparsers):
    parser = subparsers.add_parser("keys", help="list the keys of one section")
    parser.add_argument("--section", "-s", help=f"section to list (default: the {GLOBAL_SECTION} section)")
    parser.add_argument("FILE", help="INI file to read")
    parser.set_defaults(func=keys_cli)


def keys_cli(args):
    with load_document(args) as document:
        section = document.section(args.section)
        if section is None:
            raise KeyError(f"no section named {args.section!r}")
        for key in section:
            print(key)


def help_parser(subparsers):
    parser = subparsers.add_parser("help")
    parser.set_defaults(func=help_cli)


def help_cli(args):
    raise HelpException()


def version_parser(subparsers):
    parser = subparsers.add_parser("version", help="display version of iniread")
    parser.set_defaults(func=print_version)


def main(argv=None):
    def eprint(e, exit_code):
        perror("Error: " + str(e).strip("'\""))
        sys.exit(exit_code)

    try:
        config = default_config()
    except (ValueError, TypeError) as e:
        eprint(f"invalid iniread configuration: {e}", errno.EINVAL)

    parser, args = init_cli(argv, config)

    if argcomplete is not None:
        argcomplete.autocomplete(parser)

    try:
        args.func(args)
    except HelpException:
        parser.print_help()
    except AttributeError as e:
        parser.print_usage()
        perror("iniread: requires a subcommand")
        if getattr(args, "debug", False):
            raise e
    except KeyError as e:
        eprint(e, 1)
    except ValueError as e:
        eprint(e, errno.EINVAL)
    except IOError as e:
        eprint(e, errno.EIO)
    except KeyboardInterrupt:
        sys.exit(0)
