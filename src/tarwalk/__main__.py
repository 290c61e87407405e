from tarwalk._cli import main

main()
