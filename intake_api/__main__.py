from intake_api.main import run

run()
