from code2md.cli.main import main

main()
