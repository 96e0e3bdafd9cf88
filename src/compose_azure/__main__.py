from compose_azure.main import cli

cli()
