import os

from dealership.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5500")), debug=bool(app.config.get("DEBUG", False)))
