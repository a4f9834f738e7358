from iniread.cli import main

main()
