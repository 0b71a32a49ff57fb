from typist.app import main

main()
