from typst2rsx.cli.main import main

main()
