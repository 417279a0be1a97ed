# -*- coding: utf-8 -*-
"""
Database Models Module

The Post model backing the admin route and the public post page.
"""
from datetime import datetime, timezone
import pytz
from flask import current_app, Flask
from blog_admin import db


# ========================================
# Post Model
# ========================================

class Post(db.Model):
    """
    Blog post addressed by its slug

    The integer primary key is internal; every route looks a post up by
    ``slug``, which is unique and may be replaced by an update.
    """
    __tablename__ = 'posts'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    slug = db.Column(db.String(150), unique=True, nullable=False, index=True)
    markdown = db.Column(db.Text, nullable=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self):
        return f'<Post {self.slug}>'

    def __str__(self):
        return self.title

    def local_updated_at(self, app: 'Flask' = None):
        """Convert updated_at to the configured timezone"""
        if not self.updated_at:
            return None

        # SQLite hands back naive datetimes; they are stored as UTC
        if self.updated_at.tzinfo is None:
            aware_dt = pytz.UTC.localize(self.updated_at)
        else:
            aware_dt = self.updated_at

        tz_name = (app or current_app).config.get('TIMEZONE', 'UTC')
        return aware_dt.astimezone(pytz.timezone(tz_name))

