"""Tests for the analysis driver: end-to-end scenarios and listing invariants."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from java_apiview.analyser import Analyser
from java_apiview.analyser.declarations import NO_PUBLIC_CONSTRUCTORS_COMMENT
from java_apiview.listing import ROOT_PACKAGE_DISPLAY_NAME, APIListing, TokenKind
from java_apiview.settings import Settings

Analyse = Callable[..., APIListing]

STORAGE_SOURCES = {
    "com/example/storage/BlobClient.java": """
package com.example.storage;

import com.example.storage.models.BlobItem;
import java.io.IOException;
import java.util.List;

/** Client for blobs. */
@ServiceClient(builder = BlobClientBuilder.class)
public final class BlobClient implements AutoCloseable {
    public static final int DEFAULT_TIMEOUT = 30;
    private final String url;

    BlobClient(String url) {
        this.url = url;
    }

    @ServiceMethod(returns = ReturnType.SINGLE)
    public BlobItem getProperties() {
        return null;
    }

    @ServiceMethod(returns = ReturnType.COLLECTION)
    public List<BlobItem> listBlobs(String prefix) throws IOException {
        return null;
    }

    public String getUrl() {
        return url;
    }

    private void secretHelper() {
    }

    @Override
    public void close() {
    }

    public static final class Options {
        public Options setTimeout(int timeout) {
            return this;
        }
    }
}
""",
    "com/example/storage/BlobClientBuilder.java": """
package com.example.storage;

@ServiceClientBuilder(serviceClients = {BlobClient.class})
public class BlobClientBuilder {
    public BlobClientBuilder endpoint(String endpoint) {
        return this;
    }

    public BlobClient buildClient() {
        return new BlobClient("");
    }
}
""",
    "com/example/storage/models/BlobItem.java": """
package com.example.storage.models;

public class BlobItem {
    private String name;

    public String getName() {
        return name;
    }

    public BlobItem setName(String name) {
        this.name = name;
        return this;
    }

    public enum Tier { HOT, COOL }
}
""",
    "com/example/storage/models/package-info.java": "/** Models. */\npackage com.example.storage.models;\n",
    "com/example/storage/implementation/SecretSauce.java": (
        "package com.example.storage.implementation;\npublic class SecretSauce {}\n"
    ),
    "module-info.java": """
module com.example.storage {
    requires transitive com.example.core;
    exports com.example.storage;
    exports com.example.storage.models;
}
""",
}


def _kinds_and_texts(listing: APIListing) -> list[tuple[TokenKind, str]]:
    return [(token.kind, token.text) for token in listing.tokens]


def _is_subsequence(expected: list, actual: list) -> bool:
    remaining = iter(actual)
    return all(item in remaining for item in expected)


def _member_names(listing: APIListing) -> list[str]:
    return [token.text for token in listing.tokens if token.kind is TokenKind.MEMBER_NAME]


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


def test_package_with_only_documentation(analyse: Analyse):
    listing = analyse({"p/package-info.java": "/** Root */\npackage p;\n"})

    assert _is_subsequence(
        [
            (TokenKind.COMMENT, "Root"),
            (TokenKind.KEYWORD, "package"),
            (TokenKind.TYPE_NAME, "p"),
            (TokenKind.PUNCTUATION, "{"),
            (TokenKind.PUNCTUATION, "}"),
        ],
        _kinds_and_texts(listing),
    )


def test_single_public_class_without_members(analyse: Analyse):
    listing = analyse({"a/C.java": "package a; public class C {}"})

    assert listing.to_text() == "package a {\n    public class C {\n        public C()\n    }\n}\n"
    tokens = _kinds_and_texts(listing)
    header_end = tokens.index((TokenKind.TYPE_NAME, "C"))
    assert tokens[header_end : header_end + 11] == [
        (TokenKind.TYPE_NAME, "C"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.PUNCTUATION, "{"),
        (TokenKind.NEW_LINE, ""),
        (TokenKind.WHITESPACE, "        "),
        (TokenKind.KEYWORD, "public"),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.MEMBER_NAME, "C"),
        (TokenKind.PUNCTUATION, "("),
        (TokenKind.PUNCTUATION, ")"),
        (TokenKind.NEW_LINE, ""),
    ]
    assert tokens[-4:] == [
        (TokenKind.PUNCTUATION, "}"),
        (TokenKind.NEW_LINE, ""),
        (TokenKind.PUNCTUATION, "}"),
        (TokenKind.NEW_LINE, ""),
    ]


def test_service_client_grouping(analyse: Analyse):
    listing = analyse(
        {
            "a/Client.java": """
package a;

@ServiceClient(builder = ClientBuilder.class)
public class Client {
    public void foo() {}

    @ServiceMethod(returns = ReturnType.SINGLE)
    public void bar() {}
}
"""
        }
    )

    texts = [text for _, text in _kinds_and_texts(listing)]
    assert texts.index("// Service Methods:") < texts.index("bar") < texts.index("// Non-Service Methods:") < texts.index("foo")


def test_all_private_constructors(analyse: Analyse):
    listing = analyse({"a/C.java": "package a;\npublic class C {\n    private C() {}\n}\n"})

    assert (TokenKind.COMMENT, NO_PUBLIC_CONSTRUCTORS_COMMENT) in _kinds_and_texts(listing)
    assert "C" not in _member_names(listing)


def test_nested_generic_field(analyse: Analyse):
    source = "package a;\npublic class Holder {\n    public Map<String, Map<Integer, Double>> m;\n}\n"
    listing = analyse({"a/Holder.java": source})

    tokens = _kinds_and_texts(listing)
    start = tokens.index((TokenKind.TYPE_NAME, "Map"))
    assert tokens[start : start + 13] == [
        (TokenKind.TYPE_NAME, "Map"),
        (TokenKind.PUNCTUATION, "<"),
        (TokenKind.TYPE_NAME, "String"),
        (TokenKind.PUNCTUATION, ","),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.TYPE_NAME, "Map"),
        (TokenKind.PUNCTUATION, "<"),
        (TokenKind.TYPE_NAME, "Integer"),
        (TokenKind.PUNCTUATION, ","),
        (TokenKind.WHITESPACE, " "),
        (TokenKind.TYPE_NAME, "Double"),
        (TokenKind.PUNCTUATION, ">"),
        (TokenKind.PUNCTUATION, ">"),
    ]


def test_method_ordering(analyse: Analyse):
    listing = analyse(
        {
            "a/Ordered.java": """
package a;

public interface Ordered {
    String getName();
    void setName(String name);
    Ordered buildA();
    boolean isReady();
    void acquire();
}
"""
        }
    )

    assert _member_names(listing) == ["acquire", "getName", "setName", "isReady", "buildA"]


# ---------------------------------------------------------------------------
# Driver behaviour
# ---------------------------------------------------------------------------


def test_filter_paths(tmp_path: Path, write_java: Callable[[str, str], Path]):
    kept = write_java("a/Kept.java", "package a; public class Kept {}")
    hidden = write_java("a/implementation/Hidden.java", "package a.implementation; public class Hidden {}")
    notes = write_java("a/notes.txt", "not java")

    analyser = Analyser(settings=Settings())
    assert analyser.filter_paths([kept, hidden, notes, kept.parent]) == [kept]


def test_packages_and_units_are_ordered(analyse: Analyse):
    listing = analyse(
        {
            "b/Zeta.java": "package b; public class Zeta {}",
            "b/Alpha.java": "package b; public class Alpha {}",
            "a/Only.java": "package a; public class Only {}",
            "Top.java": "public class Top {}",
        }
    )

    tokens = listing.tokens
    package_names = [
        tokens[i + 2].text for i, token in enumerate(tokens) if token.kind is TokenKind.KEYWORD and token.text == "package"
    ]
    assert package_names == [ROOT_PACKAGE_DISPLAY_NAME, "a", "b"]
    assert tokens[2].kind is TokenKind.TEXT

    type_names = [token.text for token in tokens if token.kind is TokenKind.TYPE_NAME and token.definition_id]
    assert type_names == ["Top", "a", "Only", "b", "Alpha", "Zeta"]


def test_unparseable_file_is_logged_and_dropped(analyse: Analyse, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.ERROR, logger="java_apiview"):
        listing = analyse(
            {
                "a/Good.java": "package a; public class Good {}",
                "a/Bad.java": "package a; public class Bad { int x = ; }",
            }
        )

    assert "Bad.java" in caplog.text
    assert "Good" in _member_names(listing)
    assert "Bad" not in listing.known_types


def test_missing_file_is_logged_and_dropped(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.ERROR, logger="java_apiview"):
        listing = Analyser(settings=Settings()).analyse([tmp_path / "Ghost.java"])

    assert listing.tokens == []
    assert "Ghost.java" in caplog.text


def test_package_docs_are_emitted_without_javadoc_flag(analyse: Analyse):
    listing = analyse(
        {
            "a/package-info.java": "/**\n * Package <docs>.\n */\npackage a;\n",
            "a/Thing.java": "package a;\n/** Thing docs. */\npublic class Thing {}\n",
        }
    )

    comments = [text for kind, text in _kinds_and_texts(listing) if kind is TokenKind.COMMENT]
    assert comments == ["Package &lt;docs&gt;."]


def test_declaration_javadoc_with_flag(analyse: Analyse):
    listing = analyse({"a/Thing.java": "package a;\n/** Thing docs. */\npublic class Thing {}\n"}, show_javadoc=True)
    assert "    Thing docs.\n    public class Thing {\n" in listing.to_text()


def test_analyse_fills_given_listing_and_accepts_strings(write_java: Callable[[str, str], Path]):
    path = write_java("a/Thing.java", "package a; public class Thing {}")
    listing = APIListing()

    result = Analyser(listing=listing, settings=Settings()).analyse([str(path)])

    assert result is listing
    assert listing.known_types == {"Thing": "a.Thing"}


def test_run_summary_is_logged(analyse: Analyse, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.INFO, logger="java_apiview"):
        analyse({"a/Thing.java": "package a; public class Thing {}"})
    assert "Analysed 1 of 1 files" in caplog.text


# ---------------------------------------------------------------------------
# Listing invariants
# ---------------------------------------------------------------------------


@pytest.fixture
def storage_listing(analyse: Analyse) -> APIListing:
    return analyse(STORAGE_SOURCES)


def test_storage_listing_text(storage_listing: APIListing):
    text = storage_listing.to_text()

    assert text.startswith("package <root package> {\n    module com.example.storage {\n")
    assert (
        "    @ServiceClient(builder = BlobClientBuilder)\n"
        "    public final class BlobClient implements AutoCloseable {\n"
    ) in text
    assert "        public static final int DEFAULT_TIMEOUT = 30;\n" in text
    assert (
        "        // Service Methods:\n"
        "        public List<BlobItem> listBlobs(String prefix) throws IOException\n"
        "        public BlobItem getProperties()\n"
        "        // Non-Service Methods:\n"
        "        @Override public void close()\n"
        "        public String getUrl()\n"
    ) in text
    assert "    @ServiceClientBuilder(serviceClients = { BlobClient })\n" in text
    assert "        public BlobClientBuilder endpoint(String endpoint)\n        public BlobClient buildClient()\n" in text
    assert "Models.\npackage com.example.storage.models {\n" in text


def test_private_members_never_appear(storage_listing: APIListing):
    text = storage_listing.to_text()
    assert "secretHelper" not in text
    assert "SecretSauce" not in text
    assert "url" not in _member_names(storage_listing)
    assert "name" not in _member_names(storage_listing)


def test_braces_are_balanced(storage_listing: APIListing):
    punctuation = [token.text for token in storage_listing.tokens if token.kind is TokenKind.PUNCTUATION]
    assert punctuation.count("{") == punctuation.count("}")
    assert storage_listing.indent_level == 0


def test_definition_ids_are_unique(storage_listing: APIListing):
    ids = [token.definition_id for token in storage_listing.tokens if token.definition_id is not None]
    assert len(ids) == len(set(ids))
    assert "com.example.storage.BlobClient.listBlobs(String)" in ids
    assert "com.example.storage.models.BlobItem.Tier.0" in ids


def test_known_type_names_are_linked(storage_listing: APIListing):
    definition_ids = {token.definition_id for token in storage_listing.tokens if token.definition_id is not None}
    linked = [
        token
        for token in storage_listing.tokens
        if token.kind is TokenKind.TYPE_NAME and token.text in storage_listing.known_types
    ]

    assert {token.text for token in linked} >= {"BlobClient", "BlobClientBuilder", "BlobItem", "Options"}
    for token in linked:
        assert token.navigate_to_id == storage_listing.known_types[token.text]
        assert token.navigate_to_id in definition_ids


def test_throws_links_through_imports(storage_listing: APIListing):
    io_exception = next(token for token in storage_listing.tokens if token.text == "IOException")
    assert io_exception.navigate_to_id == "java.io.IOException"


def test_navigation_tree(storage_listing: APIListing):
    roots = [(item.id, [child.id for child in item.children]) for item in storage_listing.navigation]
    assert roots == [
        ("module-info", []),
        ("com.example.storage", ["com.example.storage.BlobClient", "com.example.storage.BlobClientBuilder"]),
        ("com.example.storage.models", ["com.example.storage.models.BlobItem"]),
    ]
    blob_client = storage_listing.navigation[1].children[0]
    assert [child.id for child in blob_client.children] == ["com.example.storage.BlobClient.Options"]


def test_two_runs_are_identical(write_java: Callable[[str, str], Path]):
    paths = [write_java(relative_path, source) for relative_path, source in STORAGE_SOURCES.items()]

    first = Analyser(settings=Settings()).analyse(paths)
    second = Analyser(settings=Settings()).analyse(paths)

    assert first.to_json() == second.to_json()


def test_declaration_names_follow_known_types_when_ambiguous(analyse: Analyse):
    sources = {
        "a/Client.java": "package a; public class Client {}",
        "b/Client.java": "package b; public class Client {}",
    }

    listing = analyse(sources)
    names = [token for token in listing.tokens if token.kind is TokenKind.TYPE_NAME and token.text == "Client"]
    assert [token.definition_id for token in names] == ["a.Client", "b.Client"]
    assert all(token.navigate_to_id == listing.known_types["Client"] for token in names)

    dropped = analyse(sources, drop_ambiguous_links=True)
    names = [token for token in dropped.tokens if token.kind is TokenKind.TYPE_NAME and token.text == "Client"]
    assert all(token.navigate_to_id is None for token in names)


def test_second_run_on_same_analyser_starts_fresh(write_java: Callable[[str, str], Path]):
    paths = [
        write_java("a/package-info.java", "/** Docs. */\npackage a;\n"),
        write_java("a/Thing.java", "package a; public class Thing {}"),
    ]
    analyser = Analyser(settings=Settings())

    first = analyser.analyse(paths)
    first_json = first.to_json()
    second = analyser.analyse(paths[1:])

    assert second is not first
    assert first.to_json() == first_json
    assert analyser.package_docs == {}
    assert [token.text for token in second.tokens].count("package") == 1
    assert "Docs." not in second.to_text()
