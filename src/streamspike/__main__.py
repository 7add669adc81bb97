from streamspike.cli import cli

cli()
