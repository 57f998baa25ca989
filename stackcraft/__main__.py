from stackcraft.cli import main

main()
