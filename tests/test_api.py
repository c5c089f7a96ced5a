"""Integration tests for the FastAPI endpoints."""

from fraudwatch.main import app
from fraudwatch.models import RulesConfig
from fraudwatch.scoring.engine import build_engine
from fraudwatch.scoring.signals import FixedSignal
from tests.conftest import at_hour, make_payload


def _pin_engine(hour=12, signal=0.0):
    config = app.state.config
    app.state.intake.replace_engine(
        build_engine(config, at_hour(hour), FixedSignal(signal)),
        config.block_threshold,
    )


class TestHealthEndpoint:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}


class TestCreateTransaction:
    def _post(self, client, **overrides):
        return client.post("/api/transactions", json=make_payload(**overrides))

    def test_low_risk(self, client):
        resp = self._post(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["fraud_score"] == 0
        assert data["risk_level"] == "LOW"
        assert data["is_blocked"] is False
        assert data["alerts"] == []
        assert data["id"]
        assert data["created_at"]

    def test_high_amount_alert(self, client):
        data = self._post(client, amount=15000).json()
        assert data["risk_level"] == "LOW"
        assert data["fraud_score"] == 0.3
        assert [a["type"] for a in data["alerts"]] == ["HIGH_AMOUNT"]
        assert data["alerts"][0]["status"] == "OPEN"
        assert data["alerts"][0]["transaction_id"] == data["id"]

    def test_worst_case_blocked(self, client):
        _pin_engine(hour=3, signal=0.25)
        data = self._post(client, amount=60000).json()
        assert data["fraud_score"] == 1.0
        assert data["risk_level"] == "CRITICAL"
        assert data["is_blocked"] is True
        assert len(data["alerts"]) == 4

    def test_currency_defaults(self, client):
        payload = make_payload()
        del payload["currency"]
        resp = client.post("/api/transactions", json=payload)
        assert resp.json()["currency"] == "USD"

    def test_negative_amount_400(self, client):
        resp = self._post(client, amount=-10)
        assert resp.status_code == 400
        data = resp.json()
        assert data["error"] == "Validation failed"
        assert data["details"][0]["loc"] == ["amount"]

    def test_bad_email_400(self, client):
        resp = self._post(client, customer_email="nope@")
        assert resp.status_code == 400
        assert resp.json()["details"][0]["loc"] == ["customer_email"]

    def test_missing_identifiers_400(self, client):
        resp = client.post("/api/transactions", json={"amount": 5})
        assert resp.status_code == 400
        locs = {d["loc"][0] for d in resp.json()["details"]}
        assert locs == {"merchant_id", "customer_id"}

    def test_infinite_amount_400(self, client):
        resp = client.post(
            "/api/transactions",
            content='{"amount": Infinity, "merchant_id": "m", "customer_id": "c"}',
            headers={"content-type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["details"][0]["loc"] == ["amount"]
        assert client.get("/api/transactions/stats").json()["total"] == 0

    def test_non_object_body_400(self, client):
        resp = client.post("/api/transactions", json=[1, 2, 3])
        assert resp.status_code == 400
        assert resp.json()["error"] == "Validation failed"

    def test_persistence_failure_500(self, client, monkeypatch):
        from fraudwatch.errors import PersistenceError

        def broken_add(tx):
            raise PersistenceError("store offline")

        monkeypatch.setattr(app.state.store, "add", broken_add)
        resp = self._post(client)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to create transaction"}


class TestListTransactions:
    def test_empty(self, client):
        resp = client.get("/api/transactions")
        assert resp.status_code == 200
        data = resp.json()
        assert data["transactions"] == []
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 0, "pages": 0}

    def test_pagination(self, client):
        for i in range(12):
            client.post("/api/transactions", json=make_payload(customer_id=f"c-{i}"))
        data = client.get("/api/transactions?page=2&limit=5").json()
        assert len(data["transactions"]) == 5
        assert data["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3}

    def test_newest_first(self, client):
        client.post("/api/transactions", json=make_payload(customer_id="first"))
        client.post("/api/transactions", json=make_payload(customer_id="second"))
        data = client.get("/api/transactions").json()
        assert data["transactions"][0]["customer_id"] == "second"

    def test_filter_by_risk_level(self, client):
        client.post("/api/transactions", json=make_payload())
        client.post("/api/transactions", json=make_payload(amount=60000))
        data = client.get("/api/transactions?riskLevel=HIGH").json()
        assert data["pagination"]["total"] == 1
        assert data["transactions"][0]["risk_level"] == "HIGH"

    def test_bad_risk_level_400(self, client):
        resp = client.get("/api/transactions?riskLevel=SEVERE")
        assert resp.status_code == 400

    def test_bad_page_400(self, client):
        assert client.get("/api/transactions?page=0").status_code == 400
        assert client.get("/api/transactions?limit=1000").status_code == 400


class TestGetTransaction:
    def test_found(self, client):
        created = client.post("/api/transactions", json=make_payload(amount=20000)).json()
        resp = client.get(f"/api/transactions/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == created

    def test_not_found(self, client):
        assert client.get("/api/transactions/does-not-exist").status_code == 404


class TestStatsEndpoint:
    def test_stats(self, client):
        _pin_engine(hour=3, signal=0.25)
        client.post("/api/transactions", json=make_payload(amount=60000))
        _pin_engine(hour=12, signal=0.0)
        client.post("/api/transactions", json=make_payload())
        data = client.get("/api/transactions/stats").json()
        assert data == {
            "total": 2,
            "high_risk": 1,
            "blocked": 1,
            "avg_fraud_score": 0.5,
        }


class TestAlertsEndpoint:
    def test_list_and_review(self, client):
        _pin_engine(hour=3)
        tx = client.post("/api/transactions", json=make_payload(amount=15000)).json()
        alerts = client.get("/api/alerts?status=OPEN").json()
        assert len(alerts) == 2

        alert_id = tx["alerts"][0]["id"]
        resp = client.patch(f"/api/alerts/{alert_id}", json={"status": "RESOLVED"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "RESOLVED"

        assert len(client.get("/api/alerts?status=OPEN").json()) == 1
        refreshed = client.get(f"/api/transactions/{tx['id']}").json()
        assert refreshed["alerts"][0]["status"] == "RESOLVED"
        assert refreshed["fraud_score"] == tx["fraud_score"]

    def test_filter_by_severity(self, client):
        _pin_engine(hour=3)
        client.post("/api/transactions", json=make_payload(amount=15000))
        data = client.get("/api/alerts?severity=MEDIUM").json()
        assert [a["type"] for a in data] == ["SUSPICIOUS_PATTERN"]

    def test_unknown_alert_404(self, client):
        resp = client.patch("/api/alerts/ghost", json={"status": "RESOLVED"})
        assert resp.status_code == 404

    def test_bad_status_400(self, client):
        resp = client.patch("/api/alerts/ghost", json={"status": "DELETED"})
        assert resp.status_code == 400


class TestRulesEndpoint:
    def test_get_rules(self, client):
        resp = client.get("/api/rules")
        assert resp.status_code == 200
        data = resp.json()
        assert data["high_amount_threshold"] == 10000
        assert data["critical_amount_threshold"] == 50000
        assert data["block_threshold"] == 0.8

    def test_updated_rules_take_effect(self, client):
        # $1500 is LOW with the default $10,000 threshold
        resp = client.post("/api/transactions", json=make_payload(amount=1500))
        assert resp.json()["alerts"] == []

        new_config = RulesConfig(high_amount_threshold=1000).model_dump()
        resp = client.put("/api/rules", json=new_config)
        assert resp.status_code == 200
        assert resp.json()["high_amount_threshold"] == 1000

        resp = client.post("/api/transactions", json=make_payload(amount=1500))
        assert [a["type"] for a in resp.json()["alerts"]] == ["HIGH_AMOUNT"]

    def test_disable_rule(self, client):
        client.put("/api/rules", json=RulesConfig(high_amount_enabled=False).model_dump())
        resp = client.post("/api/transactions", json=make_payload(amount=15000))
        assert resp.json()["alerts"] == []

    def test_all_rules_disabled_rejected(self, client):
        config = RulesConfig(
            high_amount_enabled=False,
            critical_amount_enabled=False,
            unusual_hour_enabled=False,
            exploratory_signal_enabled=False,
        ).model_dump()
        resp = client.put("/api/rules", json=config)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid rule configuration"
        # Previous config still in force
        assert client.get("/api/rules").json()["high_amount_enabled"] is True

    def test_zero_exploratory_cap_rejected(self, client):
        config = RulesConfig().model_dump()
        config["exploratory_signal_cap"] = 0
        resp = client.put("/api/rules", json=config)
        assert resp.status_code == 400
        assert resp.json()["error"] == "Validation failed"
        assert client.get("/api/rules").json()["exploratory_signal_cap"] == 0.3

        # Scoring still works with the previous config
        resp = client.post("/api/transactions", json=make_payload())
        assert resp.status_code == 201

    def test_negative_delta_rejected(self, client):
        config = RulesConfig().model_dump()
        config["high_amount_delta"] = -0.3
        assert client.put("/api/rules", json=config).status_code == 400

    def test_block_threshold_update(self, client):
        client.put("/api/rules", json=RulesConfig(block_threshold=0.6).model_dump())
        resp = client.post("/api/transactions", json=make_payload(amount=60000))
        assert resp.json()["is_blocked"] is True
