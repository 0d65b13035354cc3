"""
End-to-end tests through the HTTP layer.

Each test runs the app against its own SQLite file; users are created
directly through the repositories and authenticate with signed tokens.
"""

from datetime import date

from starlette.concurrency import run_in_threadpool

from conftest import PASSWORD


class TestAuthentication:
    def test_missing_token_is_401(self, client):
        response = client.get("/api/goals/2025/3")
        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_tampered_token_is_401(self, client):
        response = client.get("/api/dashboard", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_login_and_me(self, client, make_user):
        user = make_user(username="jdoe")
        response = client.post("/api/auth/login", json={"username": "jdoe", "password": PASSWORD})
        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == user.id
        assert body["user"]["role"] == "agent"

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.status_code == 200
        assert me.json()["username"] == "jdoe"

    def test_wrong_password(self, client, make_user):
        make_user(username="jdoe")
        response = client.post("/api/auth/login", json={"username": "jdoe", "password": "nope"})
        assert response.status_code == 401

    def test_deactivated_user_cannot_log_in(self, client, repos, make_user):
        user = make_user(username="gone")
        repos.users.update(user.id, is_active=False)
        response = client.post("/api/auth/login", json={"username": "gone", "password": PASSWORD})
        assert response.status_code == 401

    def test_health_needs_no_token(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"


class TestRoleIsolation:
    """Agents only ever see their own records; office staff pick a user."""

    def _seed_goals(self, client, auth_headers, agent_a, agent_b, activity):
        client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": 2025, "month": 3, "goal_value": 10},
            headers=auth_headers(agent_a),
        )
        client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": 2025, "month": 3, "goal_value": 20},
            headers=auth_headers(agent_b),
        )

    def test_agent_requesting_other_user_gets_own_rows(self, client, make_user, activity, auth_headers):
        agent_a, agent_b = make_user(), make_user()
        self._seed_goals(client, auth_headers, agent_a, agent_b, activity)

        response = client.get(f"/api/goals/2025/3?userId={agent_b.id}", headers=auth_headers(agent_a))

        assert response.status_code == 200
        rows = response.json()
        assert [row["user_id"] for row in rows] == [agent_a.id]
        assert rows[0]["goal_value"] == 10

    def test_admin_gets_requested_user_rows(self, client, make_user, activity, auth_headers):
        agent_a, agent_b = make_user(), make_user()
        admin = make_user(role="admin")
        self._seed_goals(client, auth_headers, agent_a, agent_b, activity)

        response = client.get(f"/api/goals/2025/3?userId={agent_b.id}", headers=auth_headers(admin))

        rows = response.json()
        assert [row["user_id"] for row in rows] == [agent_b.id]
        assert rows[0]["goal_value"] == 20
        assert rows[0]["activity_name"] == activity.name

    def test_agent_write_for_other_user_lands_on_self(self, client, repos, make_user, activity, auth_headers):
        agent_a, agent_b = make_user(), make_user()
        client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": 2025, "month": 3, "goal_value": 5, "user_id": agent_b.id},
            headers=auth_headers(agent_a),
        )

        assert len(repos.monthly_goals.list_for_period(agent_a.id, 2025, 3)) == 1
        assert repos.monthly_goals.list_for_period(agent_b.id, 2025, 3) == []

    def test_manager_writes_for_named_agent(self, client, repos, make_user, auth_headers):
        agent = make_user()
        manager = make_user(role="manager")
        response = client.post(
            "/api/commission-goals",
            json={"year": 2025, "annual_target": "60000", "user_id": agent.id},
            headers=auth_headers(manager),
        )
        assert response.status_code == 200
        assert repos.commission_goals.get(agent.id, 2025) is not None
        assert repos.commission_goals.get(manager.id, 2025) is None


class TestGoals:
    def test_goal_saved_twice_updates_in_place(self, client, make_user, activity, auth_headers):
        agent = make_user()
        headers = auth_headers(agent)
        for value in (10, 15):
            response = client.post(
                "/api/goals",
                json={"activity_id": activity.id, "year": 2025, "month": 3, "goal_value": value},
                headers=headers,
            )
            assert response.json() == {"message": "Goal saved"}

        rows = client.get("/api/goals/2025/3", headers=headers).json()
        assert [row["goal_value"] for row in rows] == [15]

    def test_unknown_activity_is_404(self, client, make_user, auth_headers):
        response = client.post(
            "/api/goals",
            json={"activity_id": 9999, "year": 2025, "month": 3, "goal_value": 1},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 404

    def test_invalid_month_is_422(self, client, make_user, activity, auth_headers):
        response = client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": 2025, "month": 13, "goal_value": 1},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 422
        assert "Month" in response.json()["error"]

    def test_missing_field_is_422(self, client, make_user, auth_headers):
        response = client.post("/api/goals", json={"year": 2025}, headers=auth_headers(make_user()))
        assert response.status_code == 422
        assert response.json()["error"] == "Validation error"

    def test_commission_goal_defaults_to_zero(self, client, make_user, auth_headers):
        response = client.get("/api/commission-goals/2025", headers=auth_headers(make_user()))
        assert response.status_code == 200
        body = response.json()
        assert body["annual_target"] == 0
        assert body["quarterly_target"] == 0
        assert body["monthly_target"] == 0

    def test_commission_goal_derives_targets(self, client, make_user, auth_headers):
        headers = auth_headers(make_user())
        client.post("/api/commission-goals", json={"year": 2025, "annual_target": 120000}, headers=headers)

        body = client.get("/api/commission-goals/2025", headers=headers).json()
        assert body["annual_target"] == 120000
        assert body["quarterly_target"] == 30000
        assert body["monthly_target"] == 10000

    def test_oversized_commission_goal_is_422(self, client, make_user, auth_headers):
        response = client.post(
            "/api/commission-goals",
            json={"year": 2025, "annual_target": "10000000000"},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 422

    def test_negative_commission_goal_is_422(self, client, make_user, auth_headers):
        response = client.post(
            "/api/commission-goals",
            json={"year": 2025, "annual_target": -5},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 422


class TestWeeklyActivities:
    def test_resubmitting_week_overwrites(self, client, make_user, activity, auth_headers):
        headers = auth_headers(make_user())
        for value in (5, 7):
            response = client.post(
                "/api/activities/weekly",
                json={"activity_id": activity.id, "week_start_date": "2025-03-03", "count_value": value},
                headers=headers,
            )
            assert response.json() == {"message": "Activity recorded"}

        rows = client.get("/api/activities/weekly/2025-03-03", headers=headers).json()
        assert len(rows) == 1
        assert rows[0]["count_value"] == 7
        assert rows[0]["week_end_date"] == "2025-03-09"

    def test_mid_week_start_is_filed_under_monday(self, client, make_user, activity, auth_headers):
        headers = auth_headers(make_user())
        client.post(
            "/api/activities/weekly",
            json={"activity_id": activity.id, "week_start_date": "2025-03-05", "count_value": 6},
            headers=headers,
        )

        rows = client.get("/api/activities/weekly/2025-03-03", headers=headers).json()
        assert [(row["week_start_date"], row["week_end_date"]) for row in rows] == [("2025-03-03", "2025-03-09")]
        same_week = client.get("/api/activities/weekly/2025-03-07", headers=headers).json()
        assert [row["count_value"] for row in same_week] == [6]

    def test_week_end_too_far_is_422(self, client, make_user, activity, auth_headers):
        response = client.post(
            "/api/activities/weekly",
            json={
                "activity_id": activity.id,
                "week_start_date": "2025-03-03",
                "week_end_date": "2025-03-20",
                "count_value": 1,
            },
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 422

    def test_catalog_listing(self, client, make_user, auth_headers):
        rows = client.get("/api/activities", headers=auth_headers(make_user())).json()
        assert "Viewings" in {row["name"] for row in rows}

    def test_agent_cannot_add_activity(self, client, make_user, auth_headers):
        response = client.post(
            "/api/activities",
            json={"name": "Open Homes", "category": "Marketing"},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 403


class TestCommissions:
    def _add(self, client, headers, amount, month=3, transaction_type="sale"):
        return client.post(
            "/api/commissions",
            json={
                "amount": amount,
                "transaction_type": transaction_type,
                "transaction_month": month,
                "transaction_year": 2025,
                "property_address": "12 Main Road",
            },
            headers=headers,
        )

    def test_add_and_list(self, client, make_user, auth_headers):
        headers = auth_headers(make_user())
        response = self._add(client, headers, "1500.00")
        assert response.status_code == 200
        assert response.json()["message"] == "Commission added"
        self._add(client, headers, "2500", month=4, transaction_type="Rental")

        year_rows = client.get("/api/commissions/2025", headers=headers).json()
        assert sorted(row["amount"] for row in year_rows) == [1500, 2500]
        month_rows = client.get("/api/commissions/2025/4", headers=headers).json()
        assert [row["transaction_type"] for row in month_rows] == ["rental"]

    def test_non_positive_amount_is_422(self, client, make_user, auth_headers):
        response = self._add(client, auth_headers(make_user()), "0")
        assert response.status_code == 422

    def test_amount_beyond_column_precision_is_422(self, client, make_user, auth_headers):
        response = self._add(client, auth_headers(make_user()), "1e40")
        assert response.status_code == 422
        assert "cannot exceed" in response.json()["error"]

    def test_unknown_type_is_422(self, client, make_user, auth_headers):
        response = self._add(client, auth_headers(make_user()), "10", transaction_type="lease")
        assert response.status_code == 422


class TestDashboard:
    def test_agent_dashboard(self, client, make_user, activity, auth_headers):
        today = date.today()
        headers = auth_headers(make_user())
        client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": today.year, "month": today.month, "goal_value": 4},
            headers=headers,
        )
        client.post(
            "/api/commissions",
            json={
                "amount": "4000",
                "transaction_type": "sale",
                "transaction_month": today.month,
                "transaction_year": today.year,
            },
            headers=headers,
        )

        body = client.get("/api/dashboard", headers=headers).json()

        assert body["view"] == "agent"
        assert body["year"] == today.year
        assert [goal["goal_value"] for goal in body["goals"]] == [4]
        assert body["commission_goal"]["annual_target"] == 0
        assert body["total_commission"] == 4000

    def test_office_overview(self, client, make_user, auth_headers):
        today = date.today()
        agent = make_user(full_name="Alice Agent")
        make_user(role="manager")
        admin = make_user(role="admin")
        client.post(
            "/api/commissions",
            json={
                "amount": "750",
                "transaction_type": "sale",
                "transaction_month": today.month,
                "transaction_year": today.year,
            },
            headers=auth_headers(agent),
        )

        body = client.get("/api/dashboard", headers=auth_headers(admin)).json()

        assert body["view"] == "office"
        assert body["agent_count"] == 1
        assert body["office_data"][0]["agent"]["id"] == agent.id
        assert body["office_data"][0]["total_commission"] == 750
        assert body["office_data"][0]["available"] is True
        assert body["office_total"] == 750


class TestUsers:
    def test_agent_cannot_create_user(self, client, make_user, auth_headers):
        response = client.post(
            "/api/users",
            json={"username": "new", "email": "new@example.com", "password": "pw", "full_name": "New"},
            headers=auth_headers(make_user()),
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Access denied. Admin/Manager only."}

    def test_admin_creates_user(self, client, repos, make_user, auth_headers):
        headers = auth_headers(make_user(role="admin"))
        payload = {"username": "new", "email": "new@example.com", "password": "pw", "full_name": "New Agent"}

        response = client.post("/api/users", json=payload, headers=headers)
        assert response.status_code == 200
        assert repos.users.get(response.json()["id"]).role == "agent"

        duplicate = client.post("/api/users", json=payload, headers=headers)
        assert duplicate.status_code == 409

    def test_invalid_role_is_422(self, client, make_user, auth_headers):
        response = client.post(
            "/api/users",
            json={"username": "x", "email": "x@example.com", "password": "pw", "full_name": "X", "role": "owner"},
            headers=auth_headers(make_user(role="admin")),
        )
        assert response.status_code == 422

    def test_agent_cannot_change_other_password(self, client, make_user, auth_headers):
        agent, other = make_user(), make_user()
        response = client.put(
            f"/api/users/{other.id}/password",
            json={"password": "new-secret"},
            headers=auth_headers(agent),
        )
        assert response.status_code == 403

    def test_agent_changes_own_password(self, client, make_user, auth_headers):
        agent = make_user(username="self")
        response = client.put(
            f"/api/users/{agent.id}/password",
            json={"password": "new-secret"},
            headers=auth_headers(agent),
        )
        assert response.status_code == 200

        login = client.post("/api/auth/login", json={"username": "self", "password": "new-secret"})
        assert login.status_code == 200


class TestAuditLog:
    def test_mutations_are_recorded(self, client, make_user, activity, auth_headers):
        agent = make_user()
        admin = make_user(role="admin")
        client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": 2025, "month": 3, "goal_value": 1},
            headers=auth_headers(agent),
        )
        client.get("/api/goals/2025/3", headers=auth_headers(agent))

        body = client.get("/api/audit-log", headers=auth_headers(admin)).json()

        assert body["total_count"] == 1
        record = body["records"][0]
        assert record["action"] == "POST /api/goals"
        assert record["table_name"] == "goals"
        assert record["user_id"] == agent.id
        assert record["username"] == agent.username

    def test_agent_cannot_read_audit_log(self, client, make_user, auth_headers):
        response = client.get("/api/audit-log", headers=auth_headers(make_user()))
        assert response.status_code == 403

    def test_created_row_id_is_recorded(self, client, make_user, auth_headers):
        admin = make_user(role="admin")
        headers = auth_headers(admin)
        created = client.post(
            "/api/users",
            json={"username": "new", "email": "new@example.com", "password": "pw", "full_name": "New"},
            headers=headers,
        ).json()
        commission = client.post(
            "/api/commissions",
            json={"amount": "100", "transaction_type": "sale", "transaction_month": 3, "transaction_year": 2025},
            headers=headers,
        ).json()

        records = client.get("/api/audit-log", headers=headers).json()["records"]

        by_action = {record["action"]: record["record_id"] for record in records}
        assert by_action == {
            "POST /api/users": created["id"],
            "POST /api/commissions": commission["id"],
        }

    def test_record_is_written_off_the_event_loop(self, client, monkeypatch, make_user, activity, auth_headers):
        dispatched = []

        async def recording_run_in_threadpool(func, *args):
            dispatched.append(func.__name__)
            return await run_in_threadpool(func, *args)

        monkeypatch.setattr("agent_tracker.main.run_in_threadpool", recording_run_in_threadpool)

        client.post(
            "/api/goals",
            json={"activity_id": activity.id, "year": 2025, "month": 3, "goal_value": 1},
            headers=auth_headers(make_user()),
        )

        assert dispatched == ["write_audit_record"]
