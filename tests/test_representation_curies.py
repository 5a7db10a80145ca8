from halwire.core.curies import Curies
from halwire.core.embedded import embedded, empty_embedded
from halwire.core.link import curi, link
from halwire.core.links import Links, empty_links, linking_to
from halwire.core.parser import parse
from halwire.core.representation import HalRepresentation


def test_single_curi_renders_as_array():
    representation = HalRepresentation(
        Links.builder()
        .curi("x", "http://example.org/rels/{rel}")
        .single(link("x:foo", "http://example.org/test"), link("x:bar", "http://example.org/test"))
        .build()
    )
    assert representation.to_json() == (
        '{"_links":{"curies":[{"href":"http://example.org/rels/{rel}","templated":true,"name":"x"}],'
        '"x:foo":{"href":"http://example.org/test"},"x:bar":{"href":"http://example.org/test"}}}'
    )


def test_renders_several_curies():
    representation = HalRepresentation(
        Links.builder()
        .curi("x", "http://example.org/rels/{rel}")
        .curi("y", "http://example.com/rels/{rel}")
        .single(link("x:foo", "http://example.org/test"))
        .single(link("y:bar", "http://example.org/test"))
        .build()
    )
    assert representation.to_json() == (
        '{"_links":{"curies":[{"href":"http://example.org/rels/{rel}","templated":true,"name":"x"},'
        '{"href":"http://example.com/rels/{rel}","templated":true,"name":"y"}],'
        '"x:foo":{"href":"http://example.org/test"},"y:bar":{"href":"http://example.org/test"}}}'
    )


def test_replaces_full_rel_with_curied_rel():
    representation = HalRepresentation(
        Links.builder()
        .curi("x", "http://example.org/rels/{rel}")
        .single(link("http://example.org/rels/foo", "http://example.org/test"))
        .build()
    )
    assert representation.to_json() == (
        '{"_links":{"curies":[{"href":"http://example.org/rels/{rel}","templated":true,"name":"x"}],'
        '"x:foo":{"href":"http://example.org/test"}}}'
    )


def test_constructor_curies_are_in_scope_but_not_rendered():
    curies = Curies([curi("x", "http://example.com/rels/{rel}")])
    hal = HalRepresentation(
        linking_to(link("http://example.com/rels/foo", "http://example.com/foo")),
        empty_embedded(),
        curies,
    )
    assert hal.curies.resolve("http://example.com/rels/foo") == "x:foo"
    assert hal.links.get_rels() == ["x:foo"]
    assert hal.links.get_link_by("x:foo") is not None
    assert hal.links.get_link_by("http://example.com/rels/foo") is not None
    assert "curies" not in hal.to_dict()["_links"]


def test_constructor_curies_reach_embedded_items():
    curies = Curies([curi("x", "http://example.com/rels/{rel}")])
    nested = HalRepresentation(
        linking_to(link("http://example.com/rels/foo", "http://example.com/foo"))
    )
    hal = HalRepresentation(
        empty_links(), embedded("http://example.com/rels/nested", [nested]), curies
    )
    assert hal.embedded.get_rels() == ["x:nested"]
    item = hal.embedded.get_items_by("x:nested")[0]
    assert item.links.get_link_by("x:foo") is not None
    assert item.links.get_link_by("http://example.com/rels/foo") is not None


def test_inherits_curies():
    embedded_hal = HalRepresentation()
    representation = HalRepresentation(
        empty_links(), embedded("http://example.com/rels/foo", [embedded_hal])
    )
    representation.merge_with_embedding(Curies([curi("x", "http://example.com/rels/{rel}")]))
    assert embedded_hal.curies.resolve("http://example.com/rels/foo") == "x:foo"


def test_removes_duplicate_curies_from_embedded_items():
    embedded_hal = HalRepresentation(
        Links.builder().curi("x", "http://example.com/rels/{rel}").build()
    )
    representation = HalRepresentation(
        Links.builder().curi("x", "http://example.com/rels/{rel}").build(),
        embedded("http://example.com/rels/foo", [embedded_hal]),
    )

    after_creation = representation.embedded.get_items_by("x:foo")[0]

    assert after_creation.curies.resolve("http://example.com/rels/foo") == "x:foo"
    assert after_creation.links.get_links_by("curies") == []
    assert representation.links.get_links_by("curies") == [
        curi("x", "http://example.com/rels/{rel}")
    ]
    # the item passed in is the one that was adjusted
    assert embedded_hal.links.get_links_by("curies") == []


def test_child_curie_beats_inherited_curie_of_same_name():
    child = HalRepresentation(
        Links.builder()
        .curi("x", "http://b.example/rels/{rel}")
        .single(link("http://b.example/rels/foo", "/foo"))
        .build()
    )
    parent = HalRepresentation(
        Links.builder()
        .curi("x", "http://a.example/rels/{rel}")
        .curi("y", "http://c.example/rels/{rel}")
        .build(),
        embedded("http://a.example/rels/children", [child]),
    )

    assert parent.embedded.get_rels() == ["x:children"]
    assert parent.curies.resolve("http://a.example/rels/foo") == "x:foo"

    # nearer scope wins for the shared prefix
    assert child.curies.resolve("http://b.example/rels/foo") == "x:foo"
    assert child.curies.resolve("http://a.example/rels/foo") == "http://a.example/rels/foo"
    # other inherited prefixes stay available
    assert child.curies.resolve("http://c.example/rels/bar") == "y:bar"
    # the differing declaration is kept on the wire
    assert child.links.get_links_by("curies") == [curi("x", "http://b.example/rels/{rel}")]
    assert child.to_dict()["_links"]["x:foo"] == {"href": "/foo"}


def test_with_links_rederives_curies_for_embedded_items():
    child = HalRepresentation(linking_to(link("http://example.org/rels/foo", "/foo")))
    parent = HalRepresentation(
        empty_links(), embedded("http://example.org/rels/child", [child])
    )
    assert parent.embedded.get_rels() == ["http://example.org/rels/child"]

    parent.with_links(curi("x", "http://example.org/rels/{rel}"))

    assert parent.embedded.get_rels() == ["x:child"]
    assert child.links.get_rels() == ["x:foo"]
    assert child.curies.resolve("http://example.org/rels/foo") == "x:foo"
    assert parent.to_dict() == {
        "_links": {
            "curies": [
                {"href": "http://example.org/rels/{rel}", "templated": True, "name": "x"}
            ]
        },
        "_embedded": {"x:child": [{"_links": {"x:foo": {"href": "/foo"}}}]},
    }


def test_with_embedded_applies_curies_to_new_items():
    parent = HalRepresentation(
        Links.builder().curi("x", "http://example.org/rels/{rel}").build()
    )
    item = HalRepresentation(linking_to(link("http://example.org/rels/foo", "/foo")))
    parent.with_embedded("http://example.org/rels/item", item)
    assert parent.embedded.get_rels() == ["x:item"]
    assert not parent.embedded.is_array("x:item")
    assert item.links.get_rels() == ["x:foo"]


def test_embedding_does_not_drop_the_childs_own_curies():
    child = HalRepresentation(
        Links.builder()
        .curi("x", "http://example.org/rels/{rel}")
        .single(link("http://example.org/rels/foo", "/foo"))
        .build()
    )
    HalRepresentation(
        Links.builder().curi("x", "http://example.org/rels/{rel}").build(),
        embedded("item", [child]),
    )
    assert child.links.get_links_by("curies") == []

    HalRepresentation(empty_links(), embedded("item", [child]))

    assert child.links.get_links_by("curies") == [curi("x", "http://example.org/rels/{rel}")]
    assert child.links.get_link_by("http://example.org/rels/foo").href == "/foo"
    assert child.to_dict()["_links"] == {
        "curies": [{"href": "http://example.org/rels/{rel}", "templated": True, "name": "x"}],
        "x:foo": {"href": "/foo"},
    }


def test_with_embedded_replaces_rel_given_in_other_form():
    document = parse(
        '{"_links":{"curies":[{"href":"http://example.org/rels/{rel}","name":"x","templated":true}]},'
        '"_embedded":{"x:orders":[{"_links":{"self":{"href":"/o/1"}}}]}}'
    ).as_type()
    replacement = HalRepresentation(linking_to(link("self", "/o/2")))

    document.with_embedded("http://example.org/rels/orders", [replacement])

    assert document.embedded.get_items_by("x:orders") == [replacement]
    assert document.embedded.get_rels() == ["x:orders"]
    assert list(document.to_dict()["_embedded"]) == ["x:orders"]
