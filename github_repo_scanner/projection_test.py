"""Unit tests for raw object projection."""

from .conftest import make_raw_repo
from .models import OwnerRecord
from .projection import is_fork, to_member, to_owner, to_repository


def describe_is_fork():
    def it_reads_the_fork_flag():
        assert is_fork({"fork": True})
        assert not is_fork({"fork": False})

    def it_treats_a_missing_flag_as_not_a_fork():
        assert not is_fork({"id": 1})


def describe_to_repository():
    def it_maps_rest_fields():
        record = to_repository(make_raw_repo(7, description="desc", homepage="https://example.com"))

        assert record.owner == "owner7"
        assert record.id == 7
        assert record.name == "repo7"
        assert record.full_name == "owner7/repo7"
        assert record.clone_url == "https://github.com/owner7/repo7.git"
        assert record.url == "https://github.com/owner7/repo7"
        assert record.default_branch == "main"
        assert record.description == "desc"
        assert record.homepage == "https://example.com"

    def it_keeps_missing_fields_absent():
        record = to_repository({"id": 3})

        assert record.id == 3
        assert record.owner is None
        assert record.clone_url is None
        assert record.default_branch is None

    def it_keeps_empty_strings_distinct_from_absence():
        record = to_repository(make_raw_repo(7, homepage="", description=None))

        assert record.homepage == ""
        assert record.description is None

    def it_can_use_another_clone_url_field():
        record = to_repository(make_raw_repo(7), clone_url_field="ssh_url")

        assert record.clone_url == "git@github.com:owner7/repo7.git"

    def it_overrides_the_default_branch():
        assert to_repository(make_raw_repo(7), default_branch="master").default_branch == "master"

    def it_overrides_even_when_the_remote_value_is_missing():
        assert to_repository({"id": 1}, default_branch="master").default_branch == "master"


def describe_to_owner():
    def it_maps_the_profile():
        owner = to_owner(
            {
                "login": "octo-org",
                "id": 9919,
                "type": "Organization",
                "html_url": "https://github.com/octo-org",
                "blog": "https://octo.example",
            }
        )

        assert owner.login == "octo-org"
        assert owner.url == "https://github.com/octo-org"
        assert owner.blog == "https://octo.example"
        assert owner.bio is None
        assert owner.is_organization


def describe_to_member():
    def it_leaves_profile_fields_unset():
        member = to_member({"login": "octocat", "id": 1, "type": "User", "name": "The Octocat"})

        assert member == OwnerRecord(login="octocat", id=1, type="User")
