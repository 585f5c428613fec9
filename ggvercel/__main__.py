from ggvercel.cli import main

main()
