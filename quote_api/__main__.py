from quote_api.main import run

run()
