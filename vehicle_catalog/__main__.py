from vehicle_catalog.cli.main import app

app(prog_name="vehicle-catalog")
