from idsource.cli import app

if __name__ == "__main__":
    app(prog_name="idsource")
