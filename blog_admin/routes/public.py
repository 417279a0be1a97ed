# -*- coding: utf-8 -*-
"""
Public Blueprint

Read-only pages: the post index and a single post rendered from markdown.
"""
from flask import Blueprint, render_template, redirect, url_for, abort
from blog_admin.services.post_service import PostService, NotFound
from blog_admin.utils import render_markdown

bp = Blueprint('public', __name__)


@bp.route('/')
def index():
    return redirect(url_for('public.posts'))


@bp.route('/posts/')
def posts():
    return render_template('public/posts.html', posts=PostService.list_posts())


@bp.route('/posts/<slug>')
def post(slug):
    lookup = PostService.get_post(slug)
    if isinstance(lookup, NotFound):
        abort(404)

    html = render_markdown(lookup.post.markdown, context=f'post {slug}')
    return render_template('public/post.html', post=lookup.post, html=html)
