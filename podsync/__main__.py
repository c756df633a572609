from podsync.cli import main

main()
