from litbuild.cli import main

main()
