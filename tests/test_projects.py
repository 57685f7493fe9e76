import os
import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.db.models.todo import Project, Task
from tests.base import ApiTestCase


class ProjectCreateTests(ApiTestCase):
    def test_create_with_files(self):
        files = [
            ("files", ("notes.txt", b"hello", "text/plain")),
            ("files", ("plan.md", b"# plan", "text/markdown")),
        ]
        project = self.create_project(
            files=files,
            title="Launch",
            description="Ship it",
            priority="High",
            deadline="2025-04-01",
            assignee="b@x.com",
        )

        self.assertEqual(project["title"], "Launch")
        self.assertEqual(project["createdBy"], "a@x.com")
        self.assertEqual(project["assignee"], "b@x.com")
        self.assertEqual(project["deadline"], "2025-04-01T00:00:00")
        self.assertEqual(project["tasks"], [])
        self.assertEqual(len(project["files"]), 2)
        self.assertTrue(project["files"][0].endswith("-notes.txt"))
        self.assertTrue(project["files"][0].split("-", 1)[0].isdigit())

        with open(os.path.join(self.upload_dir, project["files"][1]), "rb") as stored:
            self.assertEqual(stored.read(), b"# plan")

    def test_create_without_files(self):
        project = self.create_project(title="Plain")
        self.assertEqual(project["files"], [])

    def test_created_by_is_required(self):
        response = self.client.post("/api/projects", data={"title": "Orphan"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "CreatedBy (email) is required"})

    def test_more_than_five_files_rejected(self):
        files = [("files", (f"f{i}.txt", b"x", "text/plain")) for i in range(6)]
        response = self.client.post("/api/projects", data={"createdBy": "a@x.com"}, files=files)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Too many files"})
        self.assertEqual(os.listdir(self.upload_dir), [])

    def test_same_name_uploads_are_kept_apart(self):
        files = [
            ("files", ("image.png", b"first", "image/png")),
            ("files", ("image.png", b"second", "image/png")),
        ]
        project = self.create_project(files=files)

        names = project["files"]
        self.assertEqual(len(set(names)), 2)
        contents = []
        for name in names:
            self.assertTrue(name.endswith("-image.png"))
            with open(os.path.join(self.upload_dir, name), "rb") as stored:
                contents.append(stored.read())
        self.assertEqual(contents, [b"first", b"second"])

    def test_uploads_removed_when_insert_fails(self):
        files = [("files", ("notes.txt", b"hello", "text/plain"))]
        failure = OperationalError("INSERT INTO projects", {}, Exception("database is locked"))
        with patch("app.api.todo.project.services.create_project", side_effect=failure):
            response = self.client.post(
                "/api/projects", data={"createdBy": "a@x.com"}, files=files
            )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Error creating project"})
        self.assertEqual(os.listdir(self.upload_dir), [])

    def test_deadline_with_offset_stored_as_utc(self):
        project = self.create_project(deadline="2025-04-01T09:00:00+02:00")
        self.assertEqual(project["deadline"], "2025-04-01T07:00:00")


class ProjectReadTests(ApiTestCase):
    def test_list_by_creator(self):
        self.create_project(created_by="a@x.com", title="Mine")
        self.create_project(created_by="b@x.com", title="Theirs", assignee="a@x.com")

        response = self.client.get("/api/projects", params={"email": "a@x.com"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["title"] for p in response.json()], ["Mine"])

    def test_list_requires_email(self):
        response = self.client.get("/api/projects")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Email is required"})

    def test_get_by_id(self):
        project = self.create_project(title="Launch")
        response = self.client.get(f"/api/projects/{project['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Launch")

    def test_get_missing(self):
        response = self.client.get("/api/projects/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Project not found"})


class OwnedProjectTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.register()
        self.project = self.create_project(title="Launch")
        self.task = self.create_task(self.project["id"])

    def claim(self):
        db = self.db()
        try:
            user_id = self.client.post(
                "/api/login", json={"email": "a@x.com", "password": "secret"}
            ).json()["id"]
            db.get(Project, self.project["id"]).user_id = user_id
            db.commit()
        finally:
            db.close()

    def test_created_projects_have_no_owner_id(self):
        response = self.client.get("/api/users/me/projects", params={"email": "a@x.com"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_owned_projects_expand_tasks(self):
        self.claim()
        response = self.client.get("/api/users/me/projects", params={"email": "a@x.com"})
        self.assertEqual(response.status_code, 200)
        projects = response.json()
        self.assertEqual(len(projects), 1)
        self.assertEqual(projects[0]["tasks"][0]["id"], self.task["id"])
        self.assertEqual(projects[0]["tasks"][0]["title"], "Write docs")

        single = self.client.get(
            f"/api/users/me/projects/{self.project['id']}", params={"email": "a@x.com"}
        )
        self.assertEqual(single.status_code, 200)
        self.assertEqual(single.json()["tasks"][0]["id"], self.task["id"])

    def test_owned_project_not_found(self):
        response = self.client.get(
            f"/api/users/me/projects/{self.project['id']}", params={"email": "a@x.com"}
        )
        self.assertEqual(response.status_code, 404)

    def test_identity_required(self):
        self.assertEqual(self.client.get("/api/users/me/projects").status_code, 401)
        response = self.client.get("/api/users/me/projects", params={"email": "ghost@x.com"})
        self.assertEqual(response.status_code, 401)


class ProjectUpdateTests(ApiTestCase):
    def test_partial_update_merges(self):
        project = self.create_project(title="Launch", description="Ship it", priority="Low")
        response = self.client.put(
            f"/api/projects/{project['id']}",
            json={"title": "Relaunch", "priority": "High"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["message"], "Project updated successfully")
        self.assertEqual(body["project"]["title"], "Relaunch")
        self.assertEqual(body["project"]["priority"], "High")
        self.assertEqual(body["project"]["description"], "Ship it")
        self.assertEqual(body["project"]["createdBy"], "a@x.com")

    def test_update_missing(self):
        response = self.client.put("/api/projects/999", json={"title": "x"})
        self.assertEqual(response.status_code, 404)

    def test_created_by_cannot_be_cleared(self):
        project = self.create_project(title="Launch")
        response = self.client.put(f"/api/projects/{project['id']}", json={"createdBy": None})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid request")

        unchanged = self.client.get(f"/api/projects/{project['id']}").json()
        self.assertEqual(unchanged["createdBy"], "a@x.com")

    def test_deadline_offset_converted_on_update(self):
        project = self.create_project(title="Launch")
        response = self.client.put(
            f"/api/projects/{project['id']}",
            json={"deadline": "2025-05-01T18:00:00-04:00"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["project"]["deadline"], "2025-05-01T22:00:00")


class ProjectDeleteTests(ApiTestCase):
    def test_delete_cascades_to_tasks(self):
        project = self.create_project(title="Launch")
        other = self.create_project(title="Keep")
        doomed = [self.create_task(project["id"]), self.create_task(project["id"])]
        kept = self.create_task(other["id"])

        response = self.client.delete(f"/api/projects/{project['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"message": "Project and associated tasks deleted successfully"},
        )

        self.assertEqual(self.client.get(f"/api/projects/{project['id']}").status_code, 404)
        for task in doomed:
            self.assertEqual(
                self.client.get(f"/api/tasks/{task['id']}/comments").status_code, 404
            )
        self.assertEqual(self.client.get(f"/api/projects/{project['id']}/tasks").json(), [])

        db = self.db()
        try:
            self.assertEqual(db.query(Task).count(), 1)
            self.assertEqual(db.query(Task).one().id, kept["id"])
        finally:
            db.close()

    def test_delete_missing(self):
        response = self.client.delete("/api/projects/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Project not found"})


if __name__ == "__main__":
    unittest.main()
