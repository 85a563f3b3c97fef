from tabdiff.cli import main

main()
