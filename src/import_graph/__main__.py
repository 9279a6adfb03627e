from import_graph.cli.app import main

main()
