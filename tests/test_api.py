"""End-to-end tests for the LockIn HTTP API."""

import json
from unittest.mock import AsyncMock, patch

import pytest

import ai
import leetcode
from conftest import TEST_EMAIL, TEST_PHONE, make_plan

FIRST_TASK = "task-python-mastery-1"


# ─────────────────────────────────────────────────────────────────────────────
# Health and Error Envelope
# ─────────────────────────────────────────────────────────────────────────────


class TestBasics:
    def test_health(self, client):
        body = client.get("/").json()
        assert body["status"] == "ok"
        assert body["aiEnabled"] is False

    def test_validation_error_envelope(self, client):
        response = client.post("/api/users", json={"email": TEST_EMAIL, "name": "Ama", "phoneNumber": "123"})
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Phone number is too short"}

    def test_missing_token(self, client):
        response = client.get("/api/plans")
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized"}

    def test_bad_token(self, client):
        response = client.get("/api/plans", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or expired token"


# ─────────────────────────────────────────────────────────────────────────────
# Auth and Users
# ─────────────────────────────────────────────────────────────────────────────


class TestRegistration:
    def test_without_plan_needs_plan(self, client):
        response = client.post("/api/users", json={"email": TEST_EMAIL, "name": "Ama", "phoneNumber": TEST_PHONE})
        assert response.status_code == 201
        body = response.json()
        assert body["needsPlan"] is True
        assert body["activePlan"] is None
        assert body["user"]["phoneNumber"] == "+233241234567"

    def test_with_plan(self, registered):
        assert registered["needsPlan"] is False
        assert registered["tokenType"] == "bearer"
        assert len(registered["plans"]) == 1
        assert len(registered["activePlan"]["dailyTasks"]) == 3

    def test_duplicate_email(self, client, registered):
        response = client.post("/api/users", json={"email": "AMA@example.com", "name": "Ama", "phoneNumber": TEST_PHONE})
        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_check_email(self, client, registered):
        assert client.post("/api/check-email", json={"email": TEST_EMAIL}).json() == {"success": True, "exists": True}
        assert client.post("/api/check-email", json={"email": "x@example.com"}).json()["exists"] is False


class TestLogin:
    def test_phone_in_any_format(self, client, registered):
        response = client.post("/api/auth/login", json={"email": "Ama@Example.com", "phoneNumber": "+233 24 123 4567"})
        assert response.status_code == 200
        body = response.json()
        assert body["accessToken"]
        assert body["activePlan"]["planTitle"] == "Python Mastery"

    def test_wrong_phone(self, client, registered):
        response = client.post("/api/auth/login", json={"email": TEST_EMAIL, "phoneNumber": "0209999999"})
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid phone number. Please check and try again."

    def test_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "x@example.com", "phoneNumber": TEST_PHONE})
        assert response.status_code == 401
        assert response.json()["error"] == "No account found with this email."


class TestProfile:
    def test_get_me(self, auth_client):
        body = auth_client.get("/api/users").json()
        assert body["user"]["email"] == TEST_EMAIL
        assert body["maxPlans"] == 3

    def test_update(self, auth_client):
        body = auth_client.patch("/api/users/me", json={"name": "Ama M.", "settings": {"timezone": "UTC"}}).json()
        assert body["user"]["name"] == "Ama M."
        assert body["user"]["settings"]["timezone"] == "UTC"


# ─────────────────────────────────────────────────────────────────────────────
# Plans
# ─────────────────────────────────────────────────────────────────────────────


def add_plan(client, title: str):
    return client.post("/api/plans", json=make_plan(title).to_document())


class TestPlans:
    def test_list(self, auth_client, registered):
        body = auth_client.get("/api/plans").json()
        assert body["canAddPlan"] is True
        assert body["activePlanId"] == registered["activePlan"]["planId"]
        assert body["plans"][0]["isActive"] is True

    def test_limit(self, auth_client):
        assert add_plan(auth_client, "B").status_code == 201
        assert add_plan(auth_client, "C").status_code == 201
        response = add_plan(auth_client, "D")
        assert response.status_code == 400
        assert response.json()["error"] == "Maximum 3 plans allowed"

    def test_get_plan_with_tasks(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        plan = auth_client.get(f"/api/plans/{plan_id}").json()["plan"]
        assert [t["taskId"] for t in plan["dailyTasks"]][0] == FIRST_TASK

    def test_unknown_plan(self, auth_client):
        response = auth_client.get("/api/plans/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "Plan not found"

    def test_switch(self, auth_client):
        new_id = add_plan(auth_client, "B").json()["plan"]["planId"]
        body = auth_client.put(f"/api/plans/{new_id}", json={"action": "switch"}).json()
        assert body["activePlanId"] == new_id

    def test_rename_requires_title(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        response = auth_client.put(f"/api/plans/{plan_id}", json={"action": "rename"})
        assert response.status_code == 400
        assert response.json()["error"] == "Title is required"
        body = auth_client.put(f"/api/plans/{plan_id}", json={"action": "rename", "title": "Py"}).json()
        assert body["plans"][0]["planTitle"] == "Py"

    def test_delete_archives(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        body = auth_client.delete(f"/api/plans/{plan_id}").json()
        assert body["needsPlan"] is True
        assert body["plans"][0]["isArchived"] is True
        body = auth_client.put(f"/api/plans/{plan_id}", json={"action": "unarchive"}).json()
        assert body["activePlanId"] == plan_id

    def test_plan_id_of_another_user(self, client, registered):
        victim_id = registered["activePlan"]["planId"]
        eve = client.post("/api/users", json={
            "email": "eve@example.com", "name": "Eve", "phoneNumber": "0209876543",
        }).json()
        hijack = {**make_plan("Other", tasks=1).to_document(), "planId": victim_id}
        response = client.post("/api/plans", json=hijack,
                               headers={"Authorization": f"Bearer {eve['accessToken']}"})
        assert response.status_code == 201
        assert response.json()["plan"]["planId"] != victim_id

        owner = {"Authorization": f"Bearer {registered['accessToken']}"}
        tasks = client.get(f"/api/plans/{victim_id}", headers=owner).json()["plan"]["dailyTasks"]
        assert [t["title"] for t in tasks] == ["Task 1", "Task 2", "Task 3"]

    def test_stale_version(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        version = auth_client.get("/api/plans").json()["version"]
        auth_client.put(f"/api/plans/{plan_id}", json={"action": "rename", "title": "One"})
        response = auth_client.put(
            f"/api/plans/{plan_id}", json={"action": "rename", "title": "Two", "expectedVersion": version}
        )
        assert response.status_code == 409


# ─────────────────────────────────────────────────────────────────────────────
# Progress
# ─────────────────────────────────────────────────────────────────────────────


class TestProgress:
    def test_complete_task_uses_task_points(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        body = auth_client.post(f"/api/plans/{plan_id}/complete-task", json={"taskId": FIRST_TASK}).json()
        assert body["completed"] is True
        assert body["progress"]["totalPoints"] == 20
        assert body["globalTotalPoints"] == 20

        again = auth_client.post(f"/api/plans/{plan_id}/complete-task", json={"taskId": FIRST_TASK}).json()
        assert again["completed"] is False
        assert again["progress"]["totalPoints"] == 20

    def test_complete_with_quiz(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        auth_client.post(f"/api/plans/{plan_id}/complete-task", json={"taskId": FIRST_TASK, "quizScore": 4})
        plan = auth_client.get(f"/api/plans/{plan_id}").json()["plan"]
        assert plan["completedTasks"][FIRST_TASK]["quizScore"] == 4
        assert plan["quizAttempts"][0]["passed"] is True

    def test_unknown_task(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        response = auth_client.post(f"/api/plans/{plan_id}/complete-task", json={"taskId": "nope"})
        assert response.status_code == 404
        assert response.json()["error"] == "Task not found"

    def test_check_in_once_per_day(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        first = auth_client.post(f"/api/plans/{plan_id}/check-in").json()
        second = auth_client.post(f"/api/plans/{plan_id}/check-in").json()
        assert first["checkedIn"] is True
        assert second["checkedIn"] is False
        assert second["progress"]["currentStreak"] == 1

    def test_user_state_round(self, auth_client, registered):
        plan_id = registered["activePlan"]["planId"]
        saved = auth_client.post("/api/user-state", json={
            "planId": plan_id,
            "completedTasks": {FIRST_TASK: {"points": 20, "completedAt": "2026-01-05T10:00:00Z"}},
            "currentStreak": 1,
            "longestStreak": 1,
            "dailyCheckIns": {"2026-01-05": True},
        }).json()
        assert saved["message"] == "User state saved"

        state = auth_client.get("/api/user-state").json()["state"]
        assert state["email"] == TEST_EMAIL
        assert state["totalPoints"] == 20
        assert state["dailyCheckIns"] == {"2026-01-05": True}
        assert isinstance(state["todayTasks"], list)
        assert "currentTheme" in state


# ─────────────────────────────────────────────────────────────────────────────
# Plan Generation
# ─────────────────────────────────────────────────────────────────────────────

GOAL = {"primaryGoal": "Learn Python for automation", "categoryName": "Python",
        "startDate": "2026-01-05", "totalDays": 10}

OUTLINE = json.dumps({
    "title": "Automate Everything",
    "description": "Python scripts",
    "monthlyThemes": [{"month": 1, "theme": "Scripting", "topics": ["Files"]}],
    "taskPatterns": [{"month": 1, "tasks": [{"title": "Rename files", "type": "practice"}]}],
})


class TestEnhancedPlan:
    def test_template_without_key(self, client):
        body = client.post("/api/generate-enhanced-plan", json={"goalInput": GOAL}).json()
        assert body["source"] == "template"
        assert len(body["plan"]["dailyTasks"]) == 10

    def test_leetcode_only_for_software(self, client):
        goal = {**GOAL, "category": "music"}
        body = client.post("/api/generate-enhanced-plan", json={"goalInput": goal, "includeLeetCode": True}).json()
        assert body["plan"]["includeLeetCode"] is False
        assert not any(t["isLeetCode"] for t in body["plan"]["dailyTasks"])

    def test_leetcode_override(self, client):
        body = client.post("/api/generate-enhanced-plan", json={
            "goalInput": GOAL, "includeLeetCode": True, "leetCodeLanguage": "java",
        }).json()
        assert body["plan"]["leetCodeLanguage"] == "java"
        assert len(body["plan"]["dailyTasks"]) == 20

    def test_forced_ai_fails(self, client):
        response = client.post("/api/generate-enhanced-plan", json={"goalInput": {**GOAL, "source": "ai"}})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate plan"

    def test_ai_plan(self, client):
        with patch("ai.ai_enabled", return_value=True), patch("ai.generate_text", return_value=OUTLINE):
            body = client.post("/api/generate-enhanced-plan", json={"goalInput": GOAL}).json()
        assert body["source"] == "ai"
        assert body["plan"]["planTitle"] == "Automate Everything"

    def test_auto_falls_back_to_template(self, client):
        with patch("ai.ai_enabled", return_value=True), \
                patch("ai.generate_text", side_effect=ai.AIServiceError("down")):
            body = client.post("/api/generate-enhanced-plan", json={"goalInput": GOAL}).json()
        assert body["source"] == "template"

    def test_malformed_outline_falls_back_to_template(self, client):
        outline = json.dumps({
            "monthlyThemes": [{"month": 1, "focus": "Files"}],
            "taskPatterns": [{"month": 1, "tasks": [{"title": "Rename files"}]}],
        })
        with patch("ai.ai_enabled", return_value=True), patch("ai.generate_text", return_value=outline):
            response = client.post("/api/generate-enhanced-plan", json={"goalInput": GOAL})
        assert response.status_code == 200
        assert response.json()["source"] == "template"

    def test_malformed_outline_with_forced_ai(self, client):
        with patch("ai.generate_text", return_value="[]"):
            response = client.post("/api/generate-enhanced-plan", json={"goalInput": {**GOAL, "source": "ai"}})
        assert response.status_code == 500
        assert response.json()["success"] is False

    def test_missing_goal(self, client):
        response = client.post("/api/generate-enhanced-plan", json={})
        assert response.status_code == 400


class TestAIEndpoints:
    def test_analyze_short_goal(self, client):
        response = client.post("/api/analyze-goal", json={"goal": "code"})
        assert response.status_code == 400
        assert response.json()["error"] == "Please describe your goal in more detail"

    def test_analyze_goal(self, client):
        result = json.dumps({"detectedCategory": "backend", "questions": []})
        with patch("ai.generate_text", return_value=result):
            body = client.post("/api/analyze-goal", json={"goal": "Become a backend developer"}).json()
        assert body["success"] is True
        assert body["detectedCategory"] == "backend"

    def test_analyze_goal_failure(self, client):
        response = client.post("/api/analyze-goal", json={"goal": "Become a backend developer"})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to analyze your goal. Please try again."

    def test_followup(self, client):
        with patch("ai.generate_text", return_value='{"question": "Which framework?", "options": []}'):
            body = client.post("/api/generate-followup", json={
                "goal": "Backend", "parentQuestion": "Language?", "customAnswer": "Elixir",
            }).json()
        assert body["question"]["question"] == "Which framework?"

    def test_year_plan_failure(self, client):
        response = client.post("/api/generate-plan", json={"goal": "Learn Go"})
        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate plan. Please try again."

    def test_quiz_needs_task(self, client):
        response = client.post("/api/generate-quiz", json={"taskTitle": "Loops"})
        assert response.status_code == 400
        assert response.json()["error"] == "Missing task information"

    def test_resources(self, client):
        body = client.post("/api/generate-resources", json={
            "taskTitle": "Learn Python decorators", "taskType": "learn",
        }).json()
        sources = [r["source"] for r in body["resources"]]
        assert "Python" in sources
        assert "YouTube" in sources


# ─────────────────────────────────────────────────────────────────────────────
# LeetCode
# ─────────────────────────────────────────────────────────────────────────────

DAILY = {"date": "2026-01-05", "title": "Two Sum", "slug": "two-sum", "difficulty": "Medium",
         "link": "https://leetcode.com/problems/two-sum/"}
PROBLEM = {"title": "Two Sum", "difficulty": "Medium", "content": "<p>Find two numbers.</p>",
           "topicTags": [{"name": "Array", "slug": "array"}],
           "codeSnippets": [{"lang": "Python3", "langSlug": "python3", "code": "class Solution: ..."}]}
CORRECT = json.dumps({"correctness": "correct", "actualTimeComplexity": "O(n)", "isTimeCorrect": True,
                      "codeScore": 90, "feedback": "Nice"})


class TestLeetCode:
    def test_daily(self, client):
        with patch("leetcode.fetch_daily_problem", return_value=DAILY), \
                patch("leetcode.fetch_problem", return_value=dict(PROBLEM)):
            body = client.get("/api/leetcode-daily?language=python").json()
        assert body["daily"] == {"date": "2026-01-05", "link": DAILY["link"]}
        assert body["problem"]["parsedContent"]["description"] == "Find two numbers."
        assert body["problem"]["starterCode"] == "class Solution: ..."

    def test_daily_unavailable(self, client):
        with patch("leetcode.fetch_daily_problem", side_effect=leetcode.LeetCodeError("down")):
            assert client.get("/api/leetcode-daily").status_code == 503

    def test_verify_anonymous(self, client):
        with patch("leetcode.fetch_problem", return_value=dict(PROBLEM)), \
                patch("ai.generate_text", return_value=CORRECT):
            body = client.post("/api/verify-leetcode", json={
                "problemSlug": "two-sum", "code": "def twoSum(): ...", "userTimeComplexity": "O(n)",
            }).json()
        assert body["isCorrect"] is True
        assert body["pointsEarned"] == 20
        assert body["recorded"] is False
        assert body["complexityAnalysis"]["userTimeComplexity"] == "O(n)"
        assert body["problem"]["tags"] == ["Array"]

    def test_verify_records_on_active_plan(self, auth_client, registered):
        with patch("leetcode.fetch_problem", return_value=dict(PROBLEM)), \
                patch("ai.generate_text", return_value=CORRECT):
            body = auth_client.post("/api/verify-leetcode", json={
                "problemSlug": "two-sum", "code": "def twoSum(): ...", "taskId": FIRST_TASK,
            }).json()
        assert body["recorded"] is True

        plan = auth_client.get(f"/api/plans/{registered['activePlan']['planId']}").json()["plan"]
        assert plan["completedTasks"][FIRST_TASK]["points"] == 20
        assert plan["leetCodeSubmissions"][0]["passed"] is True

    def test_verify_problem_missing(self, client):
        with patch("leetcode.fetch_problem", side_effect=leetcode.LeetCodeError("nope")):
            response = client.post("/api/verify-leetcode", json={"problemSlug": "nope", "code": "x"})
        assert response.status_code == 404


# ─────────────────────────────────────────────────────────────────────────────
# Notifications
# ─────────────────────────────────────────────────────────────────────────────


class TestNotifications:
    def test_send_needs_recipient(self, client):
        response = client.post("/api/notifications", json={"action": "send", "type": "reminder"})
        assert response.status_code == 400

    def test_send(self, client):
        with patch("notifications.send_email", new=AsyncMock(return_value=True)):
            body = client.post("/api/notifications", json={
                "type": "achievement", "email": TEST_EMAIL, "name": "Ama",
            }).json()
        assert body["results"] == {"email": True}

    def test_batch(self, client, registered):
        with patch("notifications.send_sms", new=AsyncMock(return_value=True)), \
                patch("notifications.send_email", new=AsyncMock(return_value=True)):
            body = client.post("/api/notifications", json={"action": "batch-reminder"}).json()
        assert body["results"]["total"] == 1

    def test_send_sms_without_provider(self, client):
        response = client.post("/api/send-sms", json={"to": TEST_PHONE, "message": "Hi"})
        assert response.status_code == 500
        assert response.json()["error"] == "Arkesel API key not configured"

    def test_send_email_skipped(self, client):
        body = client.post("/api/send-email", json={"to": TEST_EMAIL, "subject": "Your plan"}).json()
        assert body["skipped"] is True

    def test_welcome(self, client):
        body = client.post("/api/send-welcome", json={"email": TEST_EMAIL, "planTitle": "Python"}).json()
        assert body["results"] == {"sms": False, "email": False}


@pytest.mark.parametrize("path", ["/api/plans", "/api/user-state", "/api/users"])
def test_protected_routes(client, path):
    assert client.get(path).status_code == 401
