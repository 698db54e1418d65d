from sonarqube_client.cli import cli

cli()
