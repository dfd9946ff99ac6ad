from plotTwist.main import main

main()
