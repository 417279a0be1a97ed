from dotenv import load_dotenv
from blog_admin import create_app

load_dotenv()
app = create_app()
