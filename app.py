from src.attendance_register.attendance_register.main import create_app

app = create_app()

if __name__ == "__main__":
    # The engine thread owns the register; the reloader would start a second one.
    app.run(debug=app.config["DEBUG"], use_reloader=False)
