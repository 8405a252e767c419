#!/usr/bin/env python3
"""
WSGI entry point for the Tweet Purge application.
This file is used by Gunicorn to run the Flask application in production:

    gunicorn --threads 4 -b 0.0.0.0:81 wsgi:app
"""

from tweetpurge import create_app

app = create_app()

if __name__ == "__main__":
    app.run()
