# -*- coding: utf-8 -*-
"""
Posts Admin Blueprint

The post listing plus a single route per post that loads it into an edit
form (GET) and handles the create, update and delete actions (POST).
The slug ``new`` addresses the creation form.
"""
from dataclasses import dataclass
from typing import Union
from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app, abort, make_response
from werkzeug.wrappers import Response
from blog_admin.forms import PostForm, PostIntent
from blog_admin.services.post_service import PostService, Found, NotFound, PostLookup


bp = Blueprint('posts_admin', __name__, url_prefix='/posts/admin')

NEW_POST_SLUG = 'new'


@dataclass(frozen=True)
class NewPost:
    """Loader result for the creation form"""


def load_post(slug: str) -> Union[NewPost, PostLookup]:
    """Produce the data the edit page renders for ``slug``

    Args:
        slug: URL slug, required

    Returns:
        NewPost for the creation sentinel, otherwise the service lookup result
    """
    if not slug:
        raise ValueError('slug is required')

    if slug == NEW_POST_SLUG:
        return NewPost()

    return PostService.get_post(slug)


def post_action(slug: str) -> Union[Response, PostForm]:
    """Handle a submitted post form

    Args:
        slug: URL slug, required; decides between create and update

    Returns:
        A redirect once the action went through, or the bound form carrying
        field errors when nothing was written
    """
    if not slug:
        raise ValueError('slug is required')

    try:
        intent = PostIntent.from_form(request.form)
    except ValueError as e:
        abort(400, description=str(e))

    if intent is PostIntent.DELETE:
        result = PostService.delete_post(slug)
        flash(result['message'], 'success')
        return _redirect_to_listing()

    form = PostForm()
    if not form.validate():
        current_app.logger.debug(f"Post form for '{slug}' rejected: {form.errors}")
        return form

    if slug == NEW_POST_SLUG:
        result = PostService.create_post(form.post_data())
    else:
        result = PostService.update_post(slug, form.post_data())

    if result['success']:
        flash(result['message'], 'success')
        return _redirect_to_listing()

    if result['error_type'] == 'not_found':
        return _render_not_found(slug)

    form.slug.errors.append(result['message'])
    return form


@bp.route('/')
def posts():
    """Post listing"""
    return render_template('admin/posts.html', posts=PostService.list_posts())


@bp.route('/<slug>', methods=['GET', 'POST'])
def edit_post(slug):
    """Create or edit form for a single post"""
    form = None
    if request.method == 'POST':
        outcome = post_action(slug)
        if not isinstance(outcome, PostForm):
            return outcome
        form = outcome

    lookup = load_post(slug)
    if isinstance(lookup, NotFound):
        return _render_not_found(lookup.slug)

    post = lookup.post if isinstance(lookup, Found) else None
    if form is None:
        form = PostForm(obj=post)

    return render_template('admin/post_form.html',
                           form=form,
                           post=post,
                           is_new_post=post is None,
                           errors=form.field_errors())


# Helper functions
def _redirect_to_listing():
    return redirect(url_for(current_app.config.get('POSTS_ADMIN_ENDPOINT', 'posts_admin.posts')))


def _render_not_found(slug):
    current_app.logger.info(f"Post not found: {slug}")
    return make_response(render_template('admin/post_not_found.html', slug=slug), 404)
