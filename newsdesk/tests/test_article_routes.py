"""
Tests for article routes.
"""

from newsdesk.config import state
from newsdesk.validators import MAX_PAGE

from .conftest import ARTICLE_BODY


class TestCreateArticle:
    """Tests for POST /articles endpoint."""

    def test_create_article(self, client, author):
        user, headers = author
        response = client.post("/articles", json={
            "Title": "Election Night",
            "Content": ARTICLE_BODY,
            "Category": "Politics",
            "Status": "Published",
        }, headers=headers)
        assert response.status_code == 201

        data = response.json()
        assert data["Message"] == "Article created successfully"
        article = data["Object"]
        assert article["Title"] == "Election Night"
        assert article["Status"] == "Published"
        assert article["AuthorId"] == user["Id"]
        assert article["Author"] == {"Id": user["Id"], "Name": "Test Author"}
        assert article["DeletedAt"] is None

    def test_status_defaults_to_draft(self, client, author):
        _, headers = author
        response = client.post("/articles", json={
            "Title": "Untitled",
            "Content": ARTICLE_BODY,
            "Category": "World",
        }, headers=headers)
        assert response.status_code == 201
        assert response.json()["Object"]["Status"] == "Draft"

    def test_short_content_rejected(self, client, author):
        _, headers = author
        response = client.post("/articles", json={
            "Title": "Short",
            "Content": "Too short",
            "Category": "World",
        }, headers=headers)
        assert response.status_code == 400
        assert "Content must be at least 50 characters" in response.json()["Errors"]

    def test_long_title_rejected(self, client, author):
        _, headers = author
        response = client.post("/articles", json={
            "Title": "T" * 151,
            "Content": ARTICLE_BODY,
            "Category": "World",
        }, headers=headers)
        assert response.status_code == 400
        assert "Title must not exceed 150 characters" in response.json()["Errors"]

    def test_invalid_status_rejected(self, client, author):
        _, headers = author
        response = client.post("/articles", json={
            "Title": "Title",
            "Content": ARTICLE_BODY,
            "Category": "World",
            "Status": "Archived",
        }, headers=headers)
        assert response.status_code == 400
        assert "Status must be either 'Draft' or 'Published'" in response.json()["Errors"]

    def test_reader_cannot_create(self, client, register):
        _, headers = register(name="Rita Reader", email="rita@example.com", role="reader")
        response = client.post("/articles", json={
            "Title": "Title",
            "Content": ARTICLE_BODY,
            "Category": "World",
        }, headers=headers)
        assert response.status_code == 403


class TestUpdateArticle:
    """Tests for PUT /articles/{article_id} endpoint."""

    def test_partial_update(self, client, author, create_article):
        _, headers = author
        article = create_article(status="Draft")

        response = client.put(f"/articles/{article['Id']}", json={"Status": "Published"}, headers=headers)
        assert response.status_code == 200

        updated = response.json()["Object"]
        assert updated["Status"] == "Published"
        assert updated["Title"] == article["Title"]
        assert updated["Content"] == article["Content"]

    def test_other_author_cannot_update(self, client, register, create_article):
        article = create_article(title="Original")
        _, other_headers = register(name="Other Author", email="other@example.com")

        response = client.put(
            f"/articles/{article['Id']}", json={"Title": "Hijacked"}, headers=other_headers
        )
        assert response.status_code == 403
        assert response.json()["Message"] == "You can only edit your own articles"
        assert state.db.get_article(article["Id"]).title == "Original"

    def test_update_missing_article(self, client, author):
        _, headers = author
        response = client.put("/articles/does-not-exist", json={"Title": "X"}, headers=headers)
        assert response.status_code == 404
        assert response.json()["Message"] == "Article not found"

    def test_update_deleted_article(self, client, author, create_article):
        _, headers = author
        article = create_article()
        client.delete(f"/articles/{article['Id']}", headers=headers)

        response = client.put(f"/articles/{article['Id']}", json={"Title": "Back"}, headers=headers)
        assert response.status_code == 404

    def test_update_validates_fields(self, client, author, create_article):
        _, headers = author
        article = create_article()
        response = client.put(f"/articles/{article['Id']}", json={"Content": "short"}, headers=headers)
        assert response.status_code == 400


class TestDeleteArticle:
    """Tests for DELETE /articles/{article_id} endpoint."""

    def test_soft_delete(self, client, author, create_article):
        _, headers = author
        article = create_article()

        response = client.delete(f"/articles/{article['Id']}", headers=headers)
        assert response.status_code == 200
        assert response.json()["Message"] == "Article deleted successfully"

        # Row is kept with a deletion timestamp
        stored = state.db.get_article(article["Id"])
        assert stored is not None
        assert stored.deleted_at is not None

    def test_deleted_article_no_longer_available(self, client, author, create_article):
        _, headers = author
        article = create_article()
        client.delete(f"/articles/{article['Id']}", headers=headers)

        response = client.get(f"/articles/{article['Id']}")
        assert response.status_code == 404
        assert response.json()["Message"] == "News article no longer available"

    def test_deleted_article_leaves_feed(self, client, author, create_article):
        _, headers = author
        article = create_article()
        client.delete(f"/articles/{article['Id']}", headers=headers)

        response = client.get("/articles")
        assert response.json()["TotalSize"] == 0

    def test_delete_twice(self, client, author, create_article):
        _, headers = author
        article = create_article()
        client.delete(f"/articles/{article['Id']}", headers=headers)

        response = client.delete(f"/articles/{article['Id']}", headers=headers)
        assert response.status_code == 404

    def test_other_author_cannot_delete(self, client, register, create_article):
        article = create_article()
        _, other_headers = register(name="Other Author", email="other@example.com")

        response = client.delete(f"/articles/{article['Id']}", headers=other_headers)
        assert response.status_code == 403
        assert response.json()["Message"] == "You can only delete your own articles"
        assert state.db.get_article(article["Id"]).deleted_at is None


class TestMyArticles:
    """Tests for GET /articles/me endpoint."""

    def test_lists_drafts_and_published(self, client, author, create_article):
        _, headers = author
        create_article(title="Draft", status="Draft")
        create_article(title="Live", status="Published")

        response = client.get("/articles/me", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["TotalSize"] == 2
        # Newest first
        assert [a["Title"] for a in data["Object"]] == ["Live", "Draft"]

    def test_excludes_deleted_by_default(self, client, author, create_article):
        _, headers = author
        kept = create_article(title="Kept")
        gone = create_article(title="Gone")
        client.delete(f"/articles/{gone['Id']}", headers=headers)

        response = client.get("/articles/me", headers=headers)
        assert [a["Id"] for a in response.json()["Object"]] == [kept["Id"]]

        response = client.get("/articles/me?includeDeleted=true", headers=headers)
        data = response.json()
        assert data["TotalSize"] == 2
        deleted = [a for a in data["Object"] if a["Id"] == gone["Id"]][0]
        assert deleted["DeletedAt"] is not None

    def test_huge_page_returns_empty_page(self, client, author, create_article):
        _, headers = author
        create_article()

        response = client.get("/articles/me?page=9223372036854775807&size=100", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["PageNumber"] == MAX_PAGE
        assert data["Object"] == []
        assert data["TotalSize"] == 1

    def test_only_own_articles(self, client, register, create_article):
        create_article(title="Mine")
        _, other_headers = register(name="Other Author", email="other@example.com")

        response = client.get("/articles/me", headers=other_headers)
        assert response.json()["TotalSize"] == 0


class TestPublicFeed:
    """Tests for GET /articles endpoint."""

    def test_empty_feed(self, client):
        response = client.get("/articles")
        assert response.status_code == 200
        data = response.json()
        assert data["Object"] == []
        assert data["PageNumber"] == 1
        assert data["PageSize"] == 10
        assert data["TotalSize"] == 0

    def test_only_published(self, client, create_article):
        create_article(title="Draft", status="Draft")
        create_article(title="Live", status="Published")

        data = client.get("/articles").json()
        assert [a["Title"] for a in data["Object"]] == ["Live"]

    def test_filter_by_category(self, client, create_article):
        create_article(title="Match", category="Sports")
        create_article(title="Other", category="World")

        data = client.get("/articles?category=Sports").json()
        assert [a["Title"] for a in data["Object"]] == ["Match"]

    def test_filter_by_author_name(self, client, register, create_article):
        create_article(title="By Test")
        _, other_headers = register(name="Maria Lopez", email="maria@example.com")
        create_article(title="By Maria", headers=other_headers)

        data = client.get("/articles?author=lopez").json()
        assert [a["Title"] for a in data["Object"]] == ["By Maria"]

    def test_search_title_and_content(self, client, create_article):
        create_article(title="Volcano erupts")
        create_article(title="Quiet day", content=ARTICLE_BODY + " Mentions a volcano.")
        create_article(title="Unrelated")

        data = client.get("/articles?q=VOLCANO").json()
        assert data["TotalSize"] == 2

    def test_search_treats_wildcards_literally(self, client, create_article):
        create_article(title="Rates up 5%")
        create_article(title="Rates up 50")

        data = client.get("/articles?q=5%25").json()
        assert [a["Title"] for a in data["Object"]] == ["Rates up 5%"]

    def test_pagination(self, client, create_article):
        for i in range(5):
            create_article(title=f"Story {i}")

        data = client.get("/articles?page=2&size=2").json()
        assert data["PageNumber"] == 2
        assert data["PageSize"] == 2
        assert data["TotalSize"] == 5
        assert [a["Title"] for a in data["Object"]] == ["Story 2", "Story 1"]

    def test_page_size_alias(self, client, create_article):
        for i in range(3):
            create_article(title=f"Story {i}")

        data = client.get("/articles?pageSize=1").json()
        assert data["PageSize"] == 1
        assert len(data["Object"]) == 1

    def test_malformed_pagination_falls_back(self, client):
        data = client.get("/articles?page=abc&size=-5").json()
        assert data["PageNumber"] == 1
        assert data["PageSize"] == 1

        data = client.get("/articles?size=1000").json()
        assert data["PageSize"] == 100

    def test_huge_page_returns_empty_page(self, client, create_article):
        create_article()

        response = client.get("/articles?page=99999999999999999999")
        assert response.status_code == 200
        data = response.json()
        assert data["PageNumber"] == MAX_PAGE
        assert data["Object"] == []
        assert data["TotalSize"] == 1


class TestGetArticle:
    """Tests for GET /articles/{article_id} endpoint."""

    def test_get_article(self, client, create_article):
        article = create_article(title="Readable")
        response = client.get(f"/articles/{article['Id']}")
        assert response.status_code == 200
        assert response.json()["Object"]["Title"] == "Readable"

    def test_get_article_not_found(self, client):
        response = client.get("/articles/does-not-exist")
        assert response.status_code == 404
        assert response.json()["Message"] == "Article not found"

    def test_read_is_logged(self, client, create_article):
        article = create_article()
        client.get(f"/articles/{article['Id']}")
        assert state.db.count_read_logs(article["Id"]) == 1

    def test_repeat_read_within_window_logged_once(self, client, create_article):
        article = create_article()
        for _ in range(5):
            response = client.get(f"/articles/{article['Id']}")
            assert response.status_code == 200
        assert state.db.count_read_logs(article["Id"]) == 1

    def test_guest_read_has_no_reader(self, client, create_article):
        article = create_article()
        client.get(f"/articles/{article['Id']}")
        assert state.db.get_read_logs(article["Id"])[0].reader_id is None

    def test_authenticated_reads_tracked_per_user(self, client, register, create_article):
        article = create_article()
        reader, reader_headers = register(name="Rita Reader", email="rita@example.com", role="reader")

        client.get(f"/articles/{article['Id']}")
        client.get(f"/articles/{article['Id']}", headers=reader_headers)
        client.get(f"/articles/{article['Id']}", headers=reader_headers)

        logs = state.db.get_read_logs(article["Id"])
        assert len(logs) == 2
        assert {log.reader_id for log in logs} == {None, reader["Id"]}

    def test_invalid_token_reads_as_guest(self, client, create_article):
        article = create_article()
        response = client.get(
            f"/articles/{article['Id']}", headers={"Authorization": "Bearer garbage"}
        )
        assert response.status_code == 200
        assert state.db.get_read_logs(article["Id"])[0].reader_id is None

    def test_read_logging_failure_does_not_fail_request(self, client, create_article, monkeypatch):
        article = create_article()

        def broken(*args, **kwargs):
            raise RuntimeError("database is locked")

        monkeypatch.setattr(state.db, "add_read_log", broken)
        response = client.get(f"/articles/{article['Id']}")
        assert response.status_code == 200
        assert response.json()["Object"]["Id"] == article["Id"]

    def test_missing_article_is_not_logged(self, client):
        client.get("/articles/does-not-exist")
        assert state.db.count_read_logs() == 0
