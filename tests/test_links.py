import pytest
from halwire.core.curies import Curies
from halwire.core.errors import HalParseError, HalValueError
from halwire.core.link import (
    curi,
    having_type,
    item,
    link,
    link_builder,
    self_link,
)
from halwire.core.links import Links, linking_to

REL_TEMPLATE = "http://example.org/rels/{rel}"


def test_exact_duplicates_collapse():
    links = Links.of(item("/foo"), item("/foo"))
    assert links.get_links_by("item") == [item("/foo")]
    assert links.to_dict() == {"item": {"href": "/foo"}}


def test_equivalent_links_collapse_first_wins():
    first = link_builder("r", "/foo").with_type("a").build()
    second = link_builder("r", "/foo").with_type("a").with_title("different").build()
    links = Links.of(first, second)
    assert links.get_links_by("r") == [first]


def test_links_differing_in_type_are_kept():
    links = Links.of(
        link_builder("r", "/foo").with_type("a").build(),
        link_builder("r", "/foo").with_type("b").build(),
    )
    assert len(links.get_links_by("r")) == 2


def test_single_link_renders_as_object():
    assert Links.of(item("/a")).to_dict() == {"item": {"href": "/a"}}


def test_multiple_links_render_as_array():
    links = Links.of(item("/a"), item("/b"))
    assert links.to_dict() == {"item": [{"href": "/a"}, {"href": "/b"}]}
    assert links.is_array("item")


def test_array_flag_forces_array_rendering():
    assert Links.builder().array(item("/a")).build().to_dict() == {"item": [{"href": "/a"}]}
    flagged = Links.builder().single(item("/a")).with_array_rels("item").build()
    assert flagged.to_dict() == {"item": [{"href": "/a"}]}
    assert not Links.of(item("/a")).is_array("item")


def test_wire_arrays_survive_a_round_trip():
    data = {"self": {"href": "/s"}, "item": [{"href": "/a"}]}
    parsed = Links.from_dict(data)
    assert parsed.is_array("item")
    assert not parsed.is_array("self")
    assert parsed.to_dict() == data


def test_curies_render_first_and_as_array():
    links = linking_to(
        link("x:foo", "http://example.org/test"), curi("x", REL_TEMPLATE)
    )
    rendered = links.to_dict()
    assert list(rendered) == ["curies", "x:foo"]
    assert rendered["curies"] == [
        {"href": REL_TEMPLATE, "templated": True, "name": "x"}
    ]


def test_lookup_by_curied_and_expanded_rel():
    links = (
        Links.builder()
        .curi("x", REL_TEMPLATE)
        .single(link("x:foo", "/foo"))
        .single(link("http://example.org/rels/bar", "/bar"))
        .build()
    )
    assert links.get_rels() == ["curies", "x:foo", "x:bar"]
    assert links.get_link_by("x:foo").href == "/foo"
    assert links.get_link_by("http://example.org/rels/foo").href == "/foo"
    assert links.get_link_by("x:bar").href == "/bar"
    assert links.get_link_by("http://example.org/rels/bar").rel == "http://example.org/rels/bar"


def test_unknown_rels_give_empty_results():
    links = Links.of(self_link("/a"))
    assert links.get_links_by("item") == []
    assert links.get_link_by("item") is None
    assert not links.has_link("item")
    assert links.get_links_by("z:other") == []


def test_predicates_filter_lookups():
    html = link_builder("item", "/a").with_type("text/html").build()
    json_link = link_builder("item", "/b").with_type("application/json").build()
    links = Links.of(html, json_link)
    assert links.get_links_by("item", having_type("application/json")) == [json_link]
    assert links.get_link_by("item", having_type("text/plain")) is None


def test_builder_without_and_replace():
    base = Links.of(self_link("/a"), item("/1"), item("/2"))
    assert Links.copy_of(base).without("item").build().get_rels() == ["self"]
    replaced = Links.copy_of(base).replace("item", [item("/3")]).build()
    assert replaced.get_links_by("item") == [item("/3")]


def test_copy_keeps_array_flags():
    base = Links.builder().array(item("/a")).build()
    assert Links.copy_of(base).single(self_link("/s")).build().is_array("item")


def test_iteration_and_emptiness():
    assert Links.empty().is_empty()
    assert list(Links.of(self_link("/a"), item("/b"))) == [self_link("/a"), item("/b")]
    assert len(Links.of(item("/a"), item("/b"), item("/a"))) == 2


def test_from_dict_rejects_bad_shapes():
    with pytest.raises(HalParseError):
        Links.from_dict([{"href": "/a"}])
    with pytest.raises(HalParseError):
        Links.from_dict({"item": "/a"})
    with pytest.raises(HalParseError):
        Links.from_dict({"item": ["/a"]})


def test_curi_without_name_is_rejected():
    with pytest.raises(HalValueError):
        Links.from_dict({"curies": [{"href": REL_TEMPLATE, "templated": True}]})


def test_curi_helper_validates_placeholder():
    with pytest.raises(HalValueError, match="placeholder"):
        Links.builder().curi("x", "http://example.org/rels/")


def test_equality_ignores_build_path():
    assert Links.of(item("/a")) == Links.from_dict({"item": {"href": "/a"}})
    assert Links.of(item("/a")) != Links.of(item("/b"))


def test_without_matches_through_inherited_curies():
    scope = Curies([curi("x", REL_TEMPLATE)])
    links = Links([link("http://example.org/rels/foo", "/foo"), self_link("/s")], curies=scope)
    assert links.get_rels() == ["x:foo", "self"]

    assert Links.copy_of(links).without("http://example.org/rels/foo").build().get_rels() == ["self"]
    unscoped = Links.builder().with_links(links).without("http://example.org/rels/foo", scope)
    assert unscoped.build().get_rels() == ["self"]


def test_curies_of_the_same_name_collapse_to_the_last():
    links = linking_to(
        curi("x", "http://example.org/rels/{rel}"),
        curi("x", "http://example.com/rels/{rel}"),
        link("http://example.com/rels/foo", "/foo"),
    )
    assert links.get_links_by("curies") == [curi("x", "http://example.com/rels/{rel}")]
    assert links.to_dict()["curies"] == [
        {"href": "http://example.com/rels/{rel}", "templated": True, "name": "x"}
    ]
    assert links.get_rels() == ["curies", "x:foo"]
