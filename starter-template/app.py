"""
Pressroom Starter Template
==========================

A ready-to-run admin panel for a blog stored in a hosted backend.

Run with:
    python app.py

Visit:
    http://localhost:5000/admin        - Admin panel
    http://localhost:5000/admin/login  - Admin login

Build the static site with:
    flask --app app generate-site
"""

from flask import Flask, redirect, url_for
from pressroom import Pressroom

from config import Config

app = Flask(__name__)
app.config.from_object(Config)

pressroom = Pressroom(app)


@app.route('/')
def index():
    return redirect(url_for('admin.dashboard'))


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("Pressroom Starter Template")
    print("=" * 60)
    print("Admin Panel:     http://localhost:5000/admin")
    print("Admin Login:     http://localhost:5000/admin/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=5000, debug=True)
