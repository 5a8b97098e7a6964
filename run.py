"""Server entry point."""

from dotenv import load_dotenv

from app.server import run

if __name__ == "__main__":
    load_dotenv()
    run()
