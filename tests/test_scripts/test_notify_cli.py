"""Tests for the notify CLI — per-channel destination flags."""

from __future__ import annotations

from scripts.notify import build_entity, build_parser


def _entity(*argv: str):
    return build_entity(build_parser().parse_args(list(argv)))


class TestDestinationFlags:
    def test_no_flags_leaves_defaults(self) -> None:
        entity = _entity()
        assert entity.params == {}
        assert entity.destination_override("email") is None
        assert entity.destination_override("webhook") is None

    def test_webhook_url_only_overrides_webhook(self) -> None:
        entity = _entity("--webhook-url", "https://hooks.example/custom")
        assert entity.params == {"webhook_destination": "https://hooks.example/custom"}
        assert entity.destination_override("webhook") == "https://hooks.example/custom"
        assert entity.destination_override("email") is None

    def test_email_to_only_overrides_email(self) -> None:
        entity = _entity("--email-to", "ops@example.com, oncall@example.com")
        assert entity.params == {"email_destination": "ops@example.com, oncall@example.com"}
        assert entity.destination_override("webhook") is None

    def test_both_flags_kept_separate(self) -> None:
        entity = _entity(
            "--email-to", "ops@example.com",
            "--webhook-url", "https://hooks.example/custom",
        )
        assert entity.destination_override("email") == "ops@example.com"
        assert entity.destination_override("webhook") == "https://hooks.example/custom"

    def test_entity_fields_from_args(self) -> None:
        entity = _entity("--name", "FooBar", "--target-url", "http://foobar.com")
        assert entity.name == "FooBar"
        assert entity.target_url == "http://foobar.com"
        assert entity.type == "http"
