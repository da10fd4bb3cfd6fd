from TextQuery.cli import main

main()
