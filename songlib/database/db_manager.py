# database/db_manager.py
from flask_sqlalchemy import SQLAlchemy
import os  # Import os for path handling
import logging
from sqlalchemy import ForeignKey, UniqueConstraint, CheckConstraint, Index
from sqlalchemy.engine import make_url

from songlib.support.dates import format_release_date

# Initialize the SQLAlchemy object
db = SQLAlchemy()
logger = logging.getLogger(__name__)


class Song(db.Model):
    """A catalog entry. Ordered for pagination by (group_name, title, id)."""

    __tablename__ = 'songs'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    group_name = db.Column(db.String(255), nullable=False)
    release_date = db.Column(db.Date, nullable=False)
    link = db.Column(db.String(500), nullable=False, default='')

    __table_args__ = (
        Index('ix_songs_group_title_id', 'group_name', 'title', 'id'),
        CheckConstraint("title <> ''", name='ck_songs_title_not_empty'),
        CheckConstraint("group_name <> ''", name='ck_songs_group_not_empty'),
        # ids are never reused, even after the highest one is deleted
        {'sqlite_autoincrement': True},
    )

    def __repr__(self):
        return f'<Song {self.id}: {self.title} by {self.group_name}>'

    def to_dict(self):
        """Converts the Song object to the SongInfo wire shape."""
        return {
            'id': self.id,
            'song': self.title,
            'group': self.group_name,
            'releaseDate': format_release_date(self.release_date),
            'link': self.link or '',
        }


class Verse(db.Model):
    """One lyrics paragraph. Owned by its song through song_id only."""

    __tablename__ = 'song_verses'

    id = db.Column(db.Integer, primary_key=True)
    song_id = db.Column(db.Integer, ForeignKey('songs.id', ondelete='CASCADE'), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False)
    text = db.Column(db.Text, nullable=False, default='')

    __table_args__ = (
        UniqueConstraint('song_id', 'position', name='uq_song_verse_position'),
        CheckConstraint('position >= 0', name='ck_song_verse_position'),
    )

    def __repr__(self):
        return f'<Verse {self.song_id}#{self.position}>'


def build_engine_options(uri, timeout_seconds):
    """Per-backend connect arguments that bound every storage round trip."""
    backend = make_url(uri).get_backend_name()
    if backend == 'sqlite':
        return {'connect_args': {'timeout': timeout_seconds}}
    if backend == 'postgresql':
        return {
            'pool_pre_ping': True,
            'pool_timeout': timeout_seconds,
            'connect_args': {
                'connect_timeout': timeout_seconds,
                'options': f'-c statement_timeout={int(timeout_seconds * 1000)}',
            },
        }
    return {'pool_pre_ping': True}


def initialize_database(app):
    """
    Initializes the SQLAlchemy extension with the Flask app instance
    and creates all database tables if they don't already exist.
    """
    uri = app.config.get('SQLALCHEMY_DATABASE_URI')
    if uri and 'SQLALCHEMY_ENGINE_OPTIONS' not in app.config:
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = build_engine_options(
            uri, app.config.get('DB_TIMEOUT_SECONDS', 5)
        )

    db.init_app(app)
    # Ensure the instance folder exists for SQLite database file
    instance_path = app.instance_path
    if not os.path.exists(instance_path):
        os.makedirs(instance_path)
        logger.info("Created instance folder: %s", instance_path)

    # Ensure the directory for the configured SQLite file exists
    try:
        if uri:
            url = make_url(uri)
            # Only handle file-based SQLite (not :memory:)
            if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
                db_dir = os.path.dirname(url.database)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)
                    logger.info("Created SQLite DB directory: %s", db_dir)
    except Exception as e:
        # Don't block app startup on path parsing issues; log and continue
        logger.warning("Could not ensure SQLite directory exists: %s", e)

    # Create database tables within the application context
    with app.app_context():
        db.create_all()
        logger.info("Database tables created or already exist.")
