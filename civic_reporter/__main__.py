from civic_reporter.cli import main

main()
