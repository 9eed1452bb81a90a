# manage.py
import sys

from app import create_app
from songlib.catalog import clear_catalog, iter_catalog
from songlib.database.db_manager import db
from songlib.models import SongInfo

USAGE = "Usage: python manage.py [create_db | clear_db | export_catalog]"


def create_db(app):
    """Creates the database tables."""
    with app.app_context():
        db.create_all()
        print(f"Database tables created at {app.config['SQLALCHEMY_DATABASE_URI']}")


def clear_db(app):
    """Deletes every song and verse and restarts id assignment."""
    with app.app_context():
        clear_catalog()
        print("Catalog cleared.")


def export_catalog(app, out=sys.stdout):
    """Writes every song as one JSON line, in catalog order."""
    count = 0
    with app.app_context():
        for song in iter_catalog(page_size=app.config['DEFAULT_SONG_PAGE_SIZE']):
            out.write(SongInfo.model_validate(song.to_dict()).model_dump_json(by_alias=True) + "\n")
            count += 1
    return count


COMMANDS = {
    'create_db': create_db,
    'clear_db': clear_db,
    'export_catalog': export_catalog,
}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(f"No command provided. {USAGE}")
        return 1
    command = COMMANDS.get(argv[0])
    if command is None:
        print(f"Unknown command: {argv[0]}")
        print(USAGE)
        return 1
    command(create_app())
    return 0


if __name__ == '__main__':
    sys.exit(main())
