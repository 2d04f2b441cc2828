import pytest

from recordnorm.normalization.matchers import FieldRole, matches_role, resolve_role


@pytest.mark.parametrize(
    "field, role",
    [
        ("firstName", FieldRole.FIRST_NAME),
        ("first_name", FieldRole.FIRST_NAME),
        ("Vorname", FieldRole.FIRST_NAME),
        ("prenom", FieldRole.FIRST_NAME),
        ("name", FieldRole.FIRST_NAME),
        ("nombre", FieldRole.FIRST_NAME),
        ("surname", FieldRole.LAST_NAME),
        ("apellido", FieldRole.LAST_NAME),
        ("Nachname", FieldRole.LAST_NAME),
        ("journal", FieldRole.LAST_NAME),
        ("correo", FieldRole.EMAIL),
        ("contact_email", FieldRole.EMAIL),
        ("courriel", FieldRole.EMAIL),
        ("edad", FieldRole.AGE),
        ("patient_age", FieldRole.AGE),
        ("departamento", FieldRole.DEPARTMENT),
        ("Abteilung", FieldRole.DEPARTMENT),
        ("category", FieldRole.DEPARTMENT),
        ("salario", FieldRole.SALARY),
        ("price", FieldRole.SALARY),
        ("gehalt", FieldRole.SALARY),
    ],
)
def test_resolve_role_across_languages(field: str, role: FieldRole) -> None:
    assert resolve_role(field) is role


def test_title_takes_first_name_slot_before_publication_role() -> None:
    assert resolve_role("title") is FieldRole.FIRST_NAME
    assert matches_role("title", FieldRole.PUBLICATION_TITLE)


def test_exact_names_do_not_match_as_substrings() -> None:
    assert matches_role("nom", FieldRole.FIRST_NAME)
    assert resolve_role("nomination") is None


def test_unknown_fields_resolve_to_none() -> None:
    assert resolve_role("identifier") is None
    assert resolve_role(None) is None
    assert not matches_role(None, FieldRole.EMAIL)


def test_author_and_journal_roles() -> None:
    assert matches_role("authors", FieldRole.AUTHOR)
    assert matches_role("Verfasser", FieldRole.AUTHOR)
    assert matches_role("venue", FieldRole.JOURNAL)
    assert resolve_role("writers") is None
