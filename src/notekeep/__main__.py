from notekeep.main import main

main()
