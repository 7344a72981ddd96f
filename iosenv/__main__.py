from iosenv.cli.app import main

main()
