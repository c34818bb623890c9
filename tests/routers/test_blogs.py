"""Tests for blog router endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from folio.models.blog import BlogPost

LONG_CONTENT = " ".join(["word"] * 450)


def test_create_blog_derives_fields(client, auth_headers, admin):
    resp = client.post(
        "/api/blogs",
        json={
            "title": "Deploying FastAPI on Fly",
            "content": LONG_CONTENT,
            "tags": ["Python", " python ", "DevOps"],
        },
        headers=auth_headers,
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["slug"] == "deploying-fastapi-on-fly"
    assert data["readTime"] == 3
    assert data["excerpt"] == LONG_CONTENT[:150] + "..."
    assert data["tags"] == ["python", "devops"]
    assert data["status"] == "published"
    assert data["author"] == admin.username
    assert data["views"] == 0
    assert data["publishedAt"] is not None


def test_short_content_excerpt_has_no_ellipsis(make_blog):
    post = make_blog(content="Short but valid content.")
    assert post["excerpt"] == "Short but valid content."
    assert post["readTime"] == 1


def test_create_blog_requires_title_and_content(client, auth_headers):
    resp = client.post("/api/blogs", json={"title": "Only"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "Title and content are required"


def test_create_blog_rejects_bad_status(client, auth_headers):
    resp = client.post(
        "/api/blogs",
        json={"title": "T", "content": "Long enough content", "status": "live"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["errors"] == [
        "Status must be either draft, published, or archived"
    ]


def test_list_excludes_content_and_drafts(client, make_blog):
    make_blog(title="Public")
    make_blog(title="Hidden", status="draft")

    resp = client.get("/api/blogs")
    assert resp.status_code == 200
    body = resp.json()
    assert [b["title"] for b in body["data"]] == ["Public"]
    assert "content" not in body["data"][0]
    assert body["pagination"]["totalBlogs"] == 1

    resp = client.get("/api/blogs", params={"status": "draft"})
    assert [b["title"] for b in resp.json()["data"]] == ["Hidden"]


def test_list_filters_by_tag_and_search(client, make_blog):
    make_blog(title="Async Python", tags=["python", "asyncio"])
    make_blog(title="Rust ownership", tags=["rust"], content="Borrowing explained.")

    resp = client.get("/api/blogs", params={"tag": "Python"})
    assert [b["title"] for b in resp.json()["data"]] == ["Async Python"]

    resp = client.get("/api/blogs", params={"search": "BORROWING"})
    assert [b["title"] for b in resp.json()["data"]] == ["Rust ownership"]

    resp = client.get("/api/blogs", params={"search": "asyncio"})
    assert [b["title"] for b in resp.json()["data"]] == ["Async Python"]


def test_popular_tags_ranked_by_count_then_name(client, make_blog):
    make_blog(tags=["python", "web"])
    make_blog(tags=["python", "api"])
    make_blog(tags=["web", "python"])
    make_blog(tags=["secret"], status="draft")

    resp = client.get("/api/blogs")
    assert resp.json()["popularTags"] == [
        {"name": "python", "count": 3},
        {"name": "web", "count": 2},
        {"name": "api", "count": 1},
    ]


def test_get_blog_increments_views(client, make_blog):
    post = make_blog()
    first = client.get(f"/api/blogs/{post['id']}").json()["data"]
    second = client.get(f"/api/blogs/{post['id']}").json()["data"]
    assert first["views"] == 1
    assert second["views"] == 2
    assert first["content"] == post["content"]


def test_get_draft_is_hidden_but_counted(client, make_blog, db_session):
    post = make_blog(status="draft")
    resp = client.get(f"/api/blogs/{post['id']}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Blog not found"

    db_session.expire_all()
    assert db_session.get(BlogPost, post["id"]).views == 1


def test_get_blog_invalid_id(client, db_session):
    resp = client.get("/api/blogs/1234")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid blog ID format"


def test_published_at_is_stamped_once(client, make_blog, auth_headers):
    post = make_blog(status="draft")
    assert post["publishedAt"] is None

    resp = client.put(
        f"/api/blogs/{post['id']}", json={"status": "published"}, headers=auth_headers
    )
    published_at = resp.json()["data"]["publishedAt"]
    assert published_at is not None

    client.put(
        f"/api/blogs/{post['id']}", json={"status": "draft"}, headers=auth_headers
    )
    resp = client.put(
        f"/api/blogs/{post['id']}", json={"status": "published"}, headers=auth_headers
    )
    assert resp.json()["data"]["publishedAt"] == published_at


def test_update_ignores_views_and_recomputes_read_time(
    client, make_blog, auth_headers
):
    post = make_blog()
    resp = client.put(
        f"/api/blogs/{post['id']}",
        json={"content": LONG_CONTENT, "views": 999},
        headers=auth_headers,
    )
    data = resp.json()["data"]
    assert data["views"] == 0
    assert data["readTime"] == 3


def test_update_requires_token(client, make_blog):
    post = make_blog()
    resp = client.put(
        f"/api/blogs/{post['id']}",
        json={"title": "Nope"},
        headers={"Authorization": "Bearer garbage"},
    )
    assert resp.status_code == 403
    assert resp.json() == {"message": "Invalid token - Authentication failed"}


def test_delete_blog(client, make_blog, auth_headers):
    post = make_blog(title="Bye")
    resp = client.delete(f"/api/blogs/{post['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == {"id": post["id"], "title": "Bye"}
    resp = client.delete(f"/api/blogs/{post['id']}", headers=auth_headers)
    assert resp.status_code == 404


def test_blog_stats(client, make_blog, auth_headers):
    resp = client.get("/api/blogs/stats", headers=auth_headers)
    assert resp.json()["data"] == {
        "totalBlogs": 0,
        "publishedBlogs": 0,
        "draftBlogs": 0,
        "totalViews": 0,
        "averageReadTime": 0,
    }

    post = make_blog(content=LONG_CONTENT)
    make_blog(status="draft")
    client.get(f"/api/blogs/{post['id']}")

    data = client.get("/api/blogs/stats", headers=auth_headers).json()["data"]
    assert data["totalBlogs"] == 2
    assert data["publishedBlogs"] == 1
    assert data["draftBlogs"] == 1
    assert data["totalViews"] == 1
    assert data["averageReadTime"] == 2.0


def test_blog_stats_requires_token(client, db_session):
    assert client.get("/api/blogs/stats").status_code == 403


def _titles(resp) -> list[str]:
    return [b["title"] for b in resp.json()["data"]]


def test_search_ignores_stored_tag_punctuation(client, make_blog):
    make_blog(title="Alpha", tags=["python", "web"])
    make_blog(title="Beta", tags=[])

    for term in ('"', ", ", "[]", "[", '","'):
        resp = client.get("/api/blogs", params={"search": term})
        assert resp.status_code == 200
        assert _titles(resp) == [], term


def test_search_and_filter_non_ascii_tags(client, make_blog):
    make_blog(title="Gamma", tags=["Café"])
    make_blog(title="Delta", tags=["tea"])

    assert _titles(client.get("/api/blogs", params={"search": "café"})) == ["Gamma"]
    assert _titles(client.get("/api/blogs", params={"search": "CAFÉ"})) == ["Gamma"]
    assert _titles(client.get("/api/blogs", params={"tag": "café"})) == ["Gamma"]
    assert client.get("/api/blogs").json()["popularTags"] == [
        {"name": "café", "count": 1},
        {"name": "tea", "count": 1},
    ]


def test_search_folds_non_ascii_case_in_title(client, make_blog):
    make_blog(title="Notes from a café", tags=[])
    resp = client.get("/api/blogs", params={"search": "CAFÉ"})
    assert _titles(resp) == ["Notes from a café"]


def test_tag_filter_is_exact_element_match(client, make_blog):
    make_blog(title="Py", tags=["python"])
    make_blog(title="Py3", tags=["python3"])
    assert _titles(client.get("/api/blogs", params={"tag": "python"})) == ["Py"]


def test_popular_tags_capped_at_ten(client, make_blog):
    make_blog(tags=[f"tag{i:02d}" for i in range(12)])
    make_blog(tags=["tag11"])

    tags = client.get("/api/blogs").json()["popularTags"]
    assert len(tags) == 10
    assert tags[0] == {"name": "tag11", "count": 2}
    assert [t["name"] for t in tags[1:]] == [f"tag{i:02d}" for i in range(9)]


def test_sort_by_published_at(client, make_blog, auth_headers, db_session):
    first = make_blog(title="Written first", status="draft")
    second = make_blog(title="Written second")
    # Publishing the draft later makes it the newest by publication date
    client.put(
        f"/api/blogs/{first['id']}", json={"status": "published"}, headers=auth_headers
    )
    db_session.get(BlogPost, second["id"]).published_at = datetime(
        2024, 1, 1, tzinfo=timezone.utc
    )
    db_session.commit()

    newest = client.get("/api/blogs", params={"sort": "newest"})
    assert _titles(newest) == ["Written first", "Written second"]
    oldest = client.get("/api/blogs", params={"sort": "oldest"})
    assert _titles(oldest) == ["Written second", "Written first"]


def test_sort_by_views(client, make_blog):
    quiet = make_blog(title="Quiet")
    popular = make_blog(title="Popular")
    make_blog(title="Unread")
    for _ in range(3):
        client.get(f"/api/blogs/{popular['id']}")
    client.get(f"/api/blogs/{quiet['id']}")

    resp = client.get("/api/blogs", params={"sort": "views"})
    assert _titles(resp) == ["Popular", "Quiet", "Unread"]


def test_blog_pages_sum_to_total(client, make_blog):
    for i in range(5):
        make_blog(title=f"Post {i}")
    make_blog(title="Draft", status="draft")

    titles: list[str] = []
    for page in (1, 2, 3):
        resp = client.get("/api/blogs", params={"limit": 2, "page": page})
        assert resp.json()["pagination"]["totalBlogs"] == 5
        titles.extend(_titles(resp))

    assert sorted(titles) == [f"Post {i}" for i in range(5)]
