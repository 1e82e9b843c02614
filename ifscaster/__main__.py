from ifscaster.main import main

main()
