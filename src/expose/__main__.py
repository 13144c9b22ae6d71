from expose.cli import main

main()
