from dotenv import load_dotenv
from blog_admin import create_app, db
from blog_admin.models import Post


load_dotenv()

app = create_app()

@app.shell_context_processor
def make_shell_context():
    return {'db': db, 'Post': Post}

if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False))
