import os

from lightlog import create_app

app = create_app(os.environ.get('FLASK_CONFIG', 'production'))

if __name__ == '__main__':
    # Production deployment configuration
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=False)
