"""
Tests for posts endpoints.
"""
from socialhub.models import Comment, Like, Post


class TestPostsEndpoints:
    """Test posts endpoints."""

    def test_create_post(self, client, test_user, auth_headers, db):
        """Test creating a post extracts hashtags."""
        response = client.post(
            "/api/posts",
            headers=auth_headers,
            json={"content": "  Sunny day #Beach #summer #beach  "},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Post created successfully"
        data = body["data"]
        assert data["content"] == "Sunny day #Beach #summer #beach"
        assert data["hashtags"] == ["beach", "summer", "beach"]
        assert data["author"]["username"] == "alice"
        assert data["counts"] == {"likes": 0, "comments": 0}
        assert data["is_liked"] is False

        stored = db.get(Post, data["id"])
        assert stored.hashtags == '["beach", "summer", "beach"]'

    def test_create_post_without_hashtags_stores_null(self, client, auth_headers, db):
        response = client.post("/api/posts", headers=auth_headers, json={"content": "plain text"})
        data = response.json()["data"]
        assert data["hashtags"] == []
        assert db.get(Post, data["id"]).hashtags is None

    def test_create_post_unauthenticated(self, client, db):
        """Test creating a post without auth fails."""
        response = client.post("/api/posts", json={"content": "Test content"})
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Authentication required"}

    def test_create_post_invalid_token(self, client, db):
        response = client.post(
            "/api/posts",
            headers={"Authorization": "Bearer not.a.token"},
            json={"content": "Test content"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    def test_create_post_blank_content(self, client, auth_headers):
        response = client.post("/api/posts", headers=auth_headers, json={"content": "   "})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Content is required"}

    def test_create_post_missing_content(self, client, auth_headers):
        response = client.post("/api/posts", headers=auth_headers, json={})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_create_post_length_limit(self, client, auth_headers):
        assert client.post("/api/posts", headers=auth_headers, json={"content": "x" * 500}).status_code == 200

        response = client.post("/api/posts", headers=auth_headers, json={"content": "x" * 501})
        assert response.status_code == 400
        assert "500 characters" in response.json()["error"]

    def test_get_posts_empty(self, client, db):
        """Test getting posts when none exist."""
        response = client.get("/api/posts")
        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_get_posts_newest_first(self, client, test_user, make_post):
        first = make_post(test_user, "first")
        second = make_post(test_user, "second")

        response = client.get("/api/posts")
        assert response.status_code == 200
        ids = [p["id"] for p in response.json()["data"]]
        assert ids == [second.id, first.id]

    def test_get_posts_cursor_pagination(self, client, test_user, make_post):
        posts = [make_post(test_user, f"post {i}") for i in range(5)]

        page1 = client.get("/api/posts", params={"limit": 2}).json()["data"]
        assert [p["id"] for p in page1] == [posts[4].id, posts[3].id]

        page2 = client.get("/api/posts", params={"limit": 2, "cursor": page1[-1]["id"]}).json()["data"]
        assert [p["id"] for p in page2] == [posts[2].id, posts[1].id]

        page3 = client.get("/api/posts", params={"limit": 2, "cursor": page2[-1]["id"]}).json()["data"]
        assert [p["id"] for p in page3] == [posts[0].id]

    def test_get_posts_unknown_cursor(self, client, test_user, make_post):
        make_post(test_user, "only")
        response = client.get("/api/posts", params={"cursor": 99999})
        assert response.status_code == 200
        assert response.json()["data"] == []

    def test_get_posts_invalid_limit(self, client, db):
        assert client.get("/api/posts", params={"limit": 0}).status_code == 400
        assert client.get("/api/posts", params={"limit": 101}).status_code == 400

    def test_get_posts_by_author(self, client, test_user, other_user, make_post):
        make_post(test_user, "alice post")
        bob_post = make_post(other_user, "bob post")

        response = client.get("/api/posts", params={"authorId": other_user.id})
        data = response.json()["data"]
        assert [p["id"] for p in data] == [bob_post.id]

    def test_listing_embeds_comment_preview(self, client, db, test_user, other_user, make_post):
        post = make_post(test_user, "popular")
        for i in range(5):
            db.add(Comment(user_id=other_user.id, post_id=post.id, content=f"comment {i}"))
        db.commit()

        listed = client.get("/api/posts").json()["data"][0]
        assert len(listed["comments"]) == 3
        assert listed["comments"][0]["content"] == "comment 4"
        assert listed["counts"]["comments"] == 5

        single = client.get(f"/api/posts/{post.id}").json()["data"]
        assert len(single["comments"]) == 5

    def test_get_post_by_id(self, client, test_user, make_post):
        """Test getting a specific post."""
        post = make_post(test_user, "Specific post #one")

        response = client.get(f"/api/posts/{post.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["content"] == "Specific post #one"
        assert data["hashtags"] == ["one"]

    def test_is_liked_for_viewer(self, client, db, test_user, other_user, other_headers, make_post):
        post = make_post(test_user, "like me")
        db.add(Like(user_id=other_user.id, post_id=post.id))
        db.commit()

        as_bob = client.get(f"/api/posts/{post.id}", headers=other_headers).json()["data"]
        assert as_bob["is_liked"] is True
        assert as_bob["likes"] == [{"user_id": other_user.id}]

        anonymous = client.get(f"/api/posts/{post.id}").json()["data"]
        assert anonymous["is_liked"] is False

    def test_get_post_not_found(self, client, db):
        """Test getting non-existent post."""
        response = client.get("/api/posts/99999")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Post not found"}

    def test_out_of_range_ids_are_rejected(self, client, test_user, auth_headers, make_post):
        """Ids beyond the database integer range fail validation instead of erroring."""
        make_post(test_user, "only")
        huge = "99999999999999999999"

        assert client.get(f"/api/posts/{huge}").status_code == 400
        assert client.get("/api/posts/0").status_code == 400
        assert client.put(f"/api/posts/{huge}", headers=auth_headers, json={"content": "x"}).status_code == 400
        assert client.delete(f"/api/posts/{huge}", headers=auth_headers).status_code == 400
        assert client.get("/api/posts", params={"cursor": huge}).status_code == 400
        response = client.get("/api/posts", params={"authorId": huge})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_update_post(self, client, test_user, auth_headers, make_post, db):
        """Test updating a post re-extracts hashtags."""
        post = make_post(test_user, "Original content #old")

        response = client.put(
            f"/api/posts/{post.id}",
            headers=auth_headers,
            json={"content": "Updated content #New"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["content"] == "Updated content #New"
        assert data["hashtags"] == ["new"]

        db.expire_all()
        assert db.get(Post, post.id).hashtags == '["new"]'

    def test_update_post_clears_hashtags(self, client, test_user, auth_headers, make_post, db):
        post = make_post(test_user, "tagged #old")
        client.put(f"/api/posts/{post.id}", headers=auth_headers, json={"content": "untagged"})
        db.expire_all()
        assert db.get(Post, post.id).hashtags is None

    def test_update_post_not_author(self, client, test_user, other_headers, make_post):
        post = make_post(test_user, "mine")
        response = client.put(f"/api/posts/{post.id}", headers=other_headers, json={"content": "hijacked"})
        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Unauthorized"}

    def test_update_post_not_found(self, client, auth_headers):
        response = client.put("/api/posts/99999", headers=auth_headers, json={"content": "x"})
        assert response.status_code == 404

    def test_update_post_unauthenticated(self, client, test_user, make_post):
        post = make_post(test_user, "mine")
        response = client.put(f"/api/posts/{post.id}", json={"content": "x"})
        assert response.status_code == 401

    def test_delete_post(self, client, db, test_user, other_user, auth_headers, make_post):
        """Test deleting a post removes its comments and likes."""
        post = make_post(test_user, "To be deleted")
        post_id = post.id
        db.add(Like(user_id=other_user.id, post_id=post_id))
        db.add(Comment(user_id=other_user.id, post_id=post_id, content="bye"))
        db.commit()

        response = client.delete(f"/api/posts/{post_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Post deleted successfully"

        # Verify deleted
        response = client.get(f"/api/posts/{post_id}")
        assert response.status_code == 404

        db.expire_all()
        assert db.query(Like).filter(Like.post_id == post_id).count() == 0
        assert db.query(Comment).filter(Comment.post_id == post_id).count() == 0

    def test_delete_post_not_author(self, client, test_user, other_headers, make_post):
        post = make_post(test_user, "mine")
        response = client.delete(f"/api/posts/{post.id}", headers=other_headers)
        assert response.status_code == 403

        assert client.get(f"/api/posts/{post.id}").status_code == 200
