from gemserve.cli import cli

cli()
