from femtotest.cli import main


main()
