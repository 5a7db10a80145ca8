from halwire.core.uri_templates import expand, is_templated, variable_names


def test_variable_names():
    assert variable_names("/products{?q,page}") == {"q", "page"}
    assert variable_names("http://example.org/rels/{rel}") == {"rel"}
    assert variable_names("/plain") == set()


def test_is_templated():
    assert is_templated("/search{?q}")
    assert not is_templated("/search?q=tea")


def test_expand_renders_numbers_and_bools():
    assert expand("/p{?skip,limit}", {"skip": 0, "limit": 5}) == "/p?skip=0&limit=5"
    assert expand("/p{?active}", {"active": True}) == "/p?active=true"


def test_expand_treats_none_as_undefined():
    assert expand("/p{?skip,limit}", {"skip": None, "limit": 5}) == "/p?limit=5"
    assert expand("/p{?skip,limit}") == "/p"
    assert expand("/items/{id}", {"id": "a b"}) == "/items/a%20b"
