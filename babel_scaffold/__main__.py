from babel_scaffold.cli import main

main()
