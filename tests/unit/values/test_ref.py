from tm_kit.values.ref import Ref, RefKind


def test_constructors_set_kind() -> None:
    assert Ref.item_identifier("http://x/#a").kind is RefKind.ITEM_IDENTIFIER
    assert Ref.subject_identifier("http://x/a").kind is RefKind.SUBJECT_IDENTIFIER
    assert Ref.subject_locator("http://x/a").kind is RefKind.SUBJECT_LOCATOR


def test_equality_uses_kind_and_iri() -> None:
    assert Ref.subject_identifier("http://x/a") == Ref.subject_identifier("http://x/a")
    assert Ref.subject_identifier("http://x/a") != Ref.subject_locator("http://x/a")
    assert len({Ref.item_identifier("http://x/#a"), Ref.item_identifier("http://x/#a")}) == 1


def test_str() -> None:
    assert str(Ref.subject_identifier("http://x/a")) == "<subject identifier http://x/a>"
    assert str(Ref.item_identifier("http://x/#a")) == "<item identifier http://x/#a>"
