import unittest
from typing import Annotated

from lazywire import AUTOWIRE, Container, Inject, ReflectionAutowire


class DB: ...


class AnotherDB(DB): ...


class TestAutowirePrecedence(unittest.TestCase):
    cont: Container

    def setUp(self):
        self.db = DB()
        self.another_db = AnotherDB()
        self.cont = Container(
            {
                AUTOWIRE: lambda c: ReflectionAutowire(c),
                "DB": lambda _: self.db,
                "db.replica": lambda _: self.another_db,
                "db": lambda _: "named",
            }
        )

    def test_autowire_uses_type_annotation_over_parameter_name(self):
        class Repo:
            def __init__(self, db: DB):
                self.db = db

        obj = self.cont.autowire(Repo)

        assert obj.db is self.db

    def test_autowire_uses_docstring_annotation_over_type_annotation(self):
        class Repo:
            def __init__(self, db: DB):
                """
                :param DB db: "db.replica"
                """
                self.db = db

        obj = self.cont.autowire(Repo)

        assert obj.db is self.another_db

    def test_autowire_uses_inject_marker_over_type_annotation(self):
        class Repo:
            def __init__(self, db: Annotated[DB, Inject("db.replica")]):
                self.db = db

        obj = self.cont.autowire(Repo)

        assert obj.db is self.another_db

    def test_autowire_uses_docstring_annotation_over_inject_marker(self):
        class Repo:
            def __init__(self, db: Annotated[DB, Inject("db.replica")]):
                """
                :param DB db: "DB"
                """
                self.db = db

        obj = self.cont.autowire(Repo)

        assert obj.db is self.db

    def test_autowire_uses_explicit_argument_over_everything(self):
        class Repo:
            def __init__(self, db: Annotated[DB, Inject("db.replica")]):
                """
                :param DB db: "db.replica"
                """
                self.db = db

        override_db = DB()
        obj = self.cont.autowire(Repo, override_db)

        assert obj.db is override_db

    def test_docstring_annotation_without_identifier_falls_back_to_type(self):
        class Repo:
            def __init__(self, db: DB, name: str):
                """
                :param DB db: The database
                :param str name: "db"
                """
                self.db = db
                self.name = name

        obj = self.cont.autowire(Repo)

        assert obj.db is self.db
        assert obj.name == "named"

    def test_docstring_annotations_are_positional(self):
        class Repo:
            def __init__(self, name: str, db: DB):
                """
                :param str name: "db"
                """
                self.name = name
                self.db = db

        obj = self.cont.autowire(Repo)

        assert obj.name == "named"
        assert obj.db is self.db

    def test_docstring_annotations_count_skipped_parameters(self):
        class Repo:
            def __init__(self, name: str, db: DB):
                """
                :param str name:
                :param DB db: "db.replica"
                """
                self.name = name
                self.db = db

        obj = self.cont.autowire(Repo, "explicit")

        assert obj.name == "explicit"
        assert obj.db is self.another_db
