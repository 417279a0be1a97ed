"""
Public page tests
"""
from blog_admin.models import Post
from blog_admin.utils import render_markdown, clean_html_content


def test_render_markdown_heading():
    assert render_markdown('# Hi') == '<h1>Hi</h1>'


def test_render_markdown_strips_scripts():
    html = render_markdown('<script>alert(1)</script>\n\n**bold**')

    assert '<script>' not in html
    assert '<strong>bold</strong>' in html


def test_clean_html_content_drops_event_handlers():
    html = clean_html_content('<a href="https://example.com" onclick="x()">link</a>')

    assert 'onclick' not in html
    assert 'href="https://example.com"' in html


def test_index_redirects_to_posts(client):
    response = client.get('/')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/posts/')


def test_public_listing(client, post):
    response = client.get('/posts/')

    assert response.status_code == 200
    assert b'/posts/s1' in response.data


def test_public_post_renders_markdown(client, post):
    response = client.get('/posts/s1')

    assert response.status_code == 200
    assert b'<h1>First</h1>' in response.data


def test_public_post_missing(client):
    response = client.get('/posts/nope')

    assert response.status_code == 404


def test_public_post_escapes_raw_html(client, db):
    db.session.add(Post(title='XSS', slug='xss', markdown='<img src="x" onerror="alert(1)">'))
    db.session.commit()

    response = client.get('/posts/xss')

    assert response.status_code == 200
    assert b'onerror' not in response.data
