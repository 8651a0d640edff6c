from grpc_transcoder.cli import cli_main

cli_main()
