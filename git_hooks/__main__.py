from git_hooks.cli import main

main()
