# catalog_admin/wsgi.py
from catalog_admin.app import create_app

# For gunicorn: gunicorn catalog_admin.wsgi:app
app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
