from milestonecheck.cli import main

main()
