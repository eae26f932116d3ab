from inventory_app.cli import run

run()
