"""
Tweet Purge - list recent tweets and delete them from a small web page.
Entry point for running the development server.
"""

from tweetpurge import create_app

# Create the Flask application using the factory pattern
app = create_app()

if __name__ == '__main__':
    config = app.config
    app.logger.info("Server started at %s", config['WEBSITE_URL'])
    app.logger.info("Showing tweets for @%s", config['TWITTER_USERNAME'])
    app.logger.info("Twitter Callback URL: %s", config['TWITTER_CALLBACK_URL'])

    app.run(host=config['HOST'], port=config['PORT'], threaded=True)
