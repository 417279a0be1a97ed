#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Database initialization script

Creates the posts table and inserts the sample posts.
"""
import os
import sys

# Make the blog_admin package importable
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from blog_admin import create_app, create_tables
from blog_admin.services.post_service import PostService


def init_db():
    """Create tables and seed sample posts"""
    app = create_app()
    create_tables(app)

    with app.app_context():
        print(f"Database: {app.config['SQLALCHEMY_DATABASE_URI']}")
        created = PostService.seed_posts()
        print(f"Seeded {created} post(s)")


if __name__ == '__main__':
    init_db()
