from webapp_smoke.cli import run

run()
