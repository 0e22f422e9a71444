from sff.cli import main

main()
