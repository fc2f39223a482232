from searchtoolkit.cli_commands import main

main()
