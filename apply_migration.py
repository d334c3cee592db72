#!/usr/bin/env python3
import os

from flask_migrate import upgrade

from lightlog import create_app

app = create_app(os.environ.get('FLASK_CONFIG', 'production'))

# Apply pending migrations
with app.app_context():
    upgrade()

print("Migration applied successfully!")
