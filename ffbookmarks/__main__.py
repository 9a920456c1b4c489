from ffbookmarks.cli import main

main()
