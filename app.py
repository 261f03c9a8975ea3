from app_controller import run_app

run_app()
