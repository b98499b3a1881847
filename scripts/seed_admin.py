"""Seed the default administrator user."""

from app import create_app
from models import db


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        service = app.extensions["auth_service"]
        admin, created = service.ensure_default_admin(
            email=app.config["ADMIN_EMAIL"],
            password=app.config["ADMIN_PASSWORD"],
            name=app.config["ADMIN_NAME"],
        )
        action = "created" if created else "already exists"
        print(f"Admin user {action}: {admin.email}")


if __name__ == "__main__":
    main()
