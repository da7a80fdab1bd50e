class TestContentCollections:
    def test_placeholders_listed_when_empty(self, auth_client):
        data = auth_client.get("/api/admin/services").json()
        assert len(data) == 3
        assert data[0]["ref"] == {"kind": "placeholder", "key": "service-1"}

    def test_unknown_collection(self, auth_client):
        assert auth_client.get("/api/admin/widgets").status_code == 404

    def test_create_replaces_placeholders(self, auth_client):
        response = auth_client.post("/api/admin/services", json={"name": "Local SEO", "order": 1})
        assert response.status_code == 201
        data = response.json()
        assert data["ref"]["kind"] == "persisted"
        assert data["slug"] == "local-seo"

        listed = auth_client.get("/api/admin/services").json()
        assert [s["name"] for s in listed] == ["Local SEO"]

    def test_save_placeholder_persists(self, auth_client):
        placeholder = auth_client.get("/api/admin/pricing/placeholders/pricing-1").json()
        placeholder["price"] = "275"
        response = auth_client.put("/api/admin/pricing/placeholders/pricing-1", json=placeholder)
        assert response.status_code == 201
        assert response.json()["ref"]["kind"] == "persisted"
        assert response.json()["price"] == "275"

    def test_delete_placeholder_is_noop(self, auth_client):
        response = auth_client.delete("/api/admin/testimonials/placeholders/testimonial-1")
        assert response.status_code == 200
        assert len(auth_client.get("/api/admin/testimonials").json()) == 3

    def test_persisted_update_and_delete(self, auth_client):
        created = auth_client.post(
            "/api/admin/testimonials", json={"client_name": "Dana", "quote": "Fast and friendly"}
        ).json()
        uuid = created["ref"]["uuid"]
        updated = auth_client.put(
            f"/api/admin/testimonials/{uuid}", json={**created, "is_featured": True}
        ).json()
        assert updated["is_featured"] is True
        assert auth_client.get(f"/api/admin/testimonials/{uuid}").json()["client_name"] == "Dana"
        assert auth_client.delete(f"/api/admin/testimonials/{uuid}").json() == {"deleted": uuid}
        assert auth_client.get(f"/api/admin/testimonials/{uuid}").status_code == 404

    def test_invalid_url_rejected(self, auth_client):
        response = auth_client.post(
            "/api/admin/portfolio", json={"client_name": "Acme", "website_url": "not a url"}
        )
        assert response.status_code == 400


class TestLandingPagesAndSettings:
    def test_landing_page_placeholder(self, auth_client):
        data = auth_client.get("/api/admin/landing-pages/realtors").json()
        assert data["hero_headline"] == "Websites for Real Estate Agents"

    def test_unknown_landing_page(self, auth_client):
        assert auth_client.get("/api/admin/landing-pages/dentists").status_code == 404

    def test_landing_page_upsert(self, auth_client):
        first = auth_client.put("/api/admin/landing-pages/realtors", json={"hero_headline": "One"}).json()
        second = auth_client.put("/api/admin/landing-pages/realtors", json={"hero_headline": "Two"}).json()
        assert first["ref"] == second["ref"]
        assert auth_client.get("/api/admin/landing-pages/realtors").json()["hero_headline"] == "Two"

    def test_settings_upsert_feeds_quote_terms(self, auth_client):
        response = auth_client.put("/api/admin/settings", json={"default_contract_terms": "Net 15"})
        assert response.status_code == 200
        assert auth_client.get("/api/admin/settings").json()["default_contract_terms"] == "Net 15"
        assert auth_client.get("/api/admin/quotes/draft").json()["contract_terms"] == "Net 15"
