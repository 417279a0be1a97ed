# -*- coding: utf-8 -*-
"""
Post Service

Model layer behind the admin route: lookups return typed results and
mutations return result dictionaries the routes turn into responses.
"""
from dataclasses import dataclass
from typing import Dict, Any, List, Union
from flask import current_app
from sqlalchemy.exc import IntegrityError
from blog_admin import db
from blog_admin.models import Post


@dataclass(frozen=True)
class Found:
    """Lookup hit"""
    post: Post


@dataclass(frozen=True)
class NotFound:
    """Lookup miss for ``slug``"""
    slug: str


PostLookup = Union[Found, NotFound]

SLUG_IN_USE_MESSAGE = 'This slug is already in use.'

SAMPLE_POSTS = [
    {
        'title': 'My First Post',
        'slug': 'my-first-post',
        'markdown': '# This is my first post\n\nIsn\'t it great?',
    },
    {
        'title': 'A Mixtape I Made Just For You',
        'slug': '90s-mixtape',
        'markdown': '# 90s Mixtape\n\n- I wish (Skee-Lo)\n- This Is How We Do It (Montell Jordan)\n- Everlong (Foo Fighters)',
    },
]


class PostService:
    """Service class handling post operations"""

    @staticmethod
    def get_post(slug: str) -> PostLookup:
        """Fetch a post by slug

        Args:
            slug: Lookup key

        Returns:
            Found with the post, or NotFound carrying the requested slug
        """
        post = Post.query.filter_by(slug=slug).first()
        if post is None:
            return NotFound(slug)
        return Found(post)

    @staticmethod
    def list_posts() -> List[Post]:
        """All posts ordered by title"""
        return Post.query.order_by(Post.title.asc()).all()

    @staticmethod
    def create_post(form_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new post

        Args:
            form_data: Dictionary with title, slug and markdown

        Returns:
            Dictionary containing success status, message and the post on success
        """
        post = Post(
            title=form_data['title'],
            slug=form_data['slug'],
            markdown=form_data['markdown'],
        )
        db.session.add(post)

        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.error(f"Database error while creating post '{form_data['slug']}': {e}")
            return {
                'success': False,
                'message': SLUG_IN_USE_MESSAGE,
                'error_type': 'integrity'
            }
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Created post {post.id}: slug={post.slug}")
        return {
            'success': True,
            'message': f'Post "{post.title}" created.',
            'post': post
        }

    @staticmethod
    def update_post(slug: str, form_data: Dict[str, Any]) -> Dict[str, Any]:
        """Update the post currently stored under ``slug``

        The submitted slug replaces the stored one, so a successful update
        re-keys the post. Nothing else references posts by slug.

        Args:
            slug: Current slug of the post (from the URL)
            form_data: Dictionary with title, slug and markdown

        Returns:
            Dictionary containing success status and message
        """
        post = Post.query.filter_by(slug=slug).first()
        if post is None:
            current_app.logger.info(f"Update skipped, post '{slug}' does not exist")
            return {
                'success': False,
                'message': f'Post "{slug}" does not exist.',
                'error_type': 'not_found'
            }

        post.title = form_data['title']
        post.slug = form_data['slug']
        post.markdown = form_data['markdown']

        try:
            db.session.commit()
        except IntegrityError as e:
            db.session.rollback()
            current_app.logger.error(f"Database error while updating post '{slug}': {e}")
            return {
                'success': False,
                'message': SLUG_IN_USE_MESSAGE,
                'error_type': 'integrity'
            }
        except Exception:
            db.session.rollback()
            raise

        if post.slug != slug:
            current_app.logger.info(f"Updated post {post.id}: slug {slug} -> {post.slug}")
        else:
            current_app.logger.info(f"Updated post {post.id}: slug={slug}")
        return {
            'success': True,
            'message': f'Post "{post.title}" updated.',
            'post': post
        }

    @staticmethod
    def delete_post(slug: str) -> Dict[str, Any]:
        """Delete the post stored under ``slug``

        Deleting a slug that is already gone still succeeds.

        Args:
            slug: Slug of the post to delete

        Returns:
            Dictionary containing success status and message
        """
        post = Post.query.filter_by(slug=slug).first()
        if post is None:
            current_app.logger.info(f"Delete requested for missing post '{slug}'")
            return {
                'success': True,
                'message': f'Post "{slug}" was already deleted.'
            }

        post_id = post.id
        db.session.delete(post)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Deleted post {post_id}: slug={slug}")
        return {
            'success': True,
            'message': f'Post "{slug}" deleted.'
        }

    @staticmethod
    def seed_posts() -> int:
        """Insert the sample posts that are not present yet

        Returns:
            Number of posts created
        """
        created = 0
        for data in SAMPLE_POSTS:
            if isinstance(PostService.get_post(data['slug']), NotFound):
                result = PostService.create_post(data)
                if result['success']:
                    created += 1
        return created
