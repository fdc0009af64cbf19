from lifeline import create_app
import os

# Development defaults; a .env file or the real environment takes precedence
os.environ.setdefault('SECRET_KEY', 'dev_secret_key_for_testing')
os.environ.setdefault('DATABASE_URI', 'sqlite:///:memory:')
os.environ.setdefault('SEED_DATA', '1')

# Create the Flask application
app = create_app()

if __name__ == '__main__':
    app.run(debug=True)
