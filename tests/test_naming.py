import pytest

from oas_provider_gen.probe.naming import (
    derive_key,
    find_prefix,
    make_key_name,
    to_hcl_name,
    to_title_name,
    valid_hcl_identifier,
)


class TestFindPrefix:
    @pytest.mark.parametrize("words, expected", [
        (["#/components/vapid", "#/components/vacant", "#/components/verily"], "#/components/v"),
        (["answerA", "answera", "answer√•"], "answer"),
        (["...three", "...four", "...fove"], "..."),
        (["/v3/boards", "/v3/boards/{id}", "/v3/images"], "/v3/"),
    ])
    def test_shared_prefix(self, words, expected):
        assert find_prefix(words) == expected

    def test_no_common_prefix(self):
        assert find_prefix(["abc", "xyz"]) == ""

    def test_fewer_than_two_words(self):
        assert find_prefix([]) == ""
        assert find_prefix(["/only/one"]) == ""

    def test_empty_first_word(self):
        assert find_prefix(["", "/a"]) == ""


class TestMakeKeyName:
    @pytest.mark.parametrize("path, expected", [
        ("/boards", "Boards"),
        ("/boards/{id}", "Boards"),
        ("/v3/image-boards/{board_id}", "V3ImageBoards"),
        ("/users/{user}/api_keys", "UsersApiKeys"),
        ("/2fast/items", "2fastItems"),
        ("/{id}", ""),
        ("", ""),
    ])
    def test_key_name(self, path, expected):
        assert make_key_name(path) == expected

    def test_derive_key_strips_prefix(self):
        assert derive_key("/v3/boards/{id}", "/v3/") == "Boards"

    def test_derive_key_falls_back_to_full_path(self):
        assert derive_key("/boards/{id}", "/boards") == "Boards"


class TestToHclName:
    @pytest.mark.parametrize("before, expected", [
        ("ThisIsCamelCase", "this_is_camel_case"),
        ("1PasswordCamelCase", "1_password_camel_case"),
        ("mixedCASETYPING", "mixed_casetyping"),
        ("star*Patrol", "star_patrol"),
        ("ELSTUPIDO", "elstupido"),
        ("APIHowdy", "api_howdy"),
        ("kebab-phrase-2", "kebab_phrase_2"),
    ])
    def test_hcl_name(self, before, expected):
        assert to_hcl_name(before) == expected


class TestToTitleName:
    @pytest.mark.parametrize("before, expected", [
        ("thisIsCamelCase", "ThisIsCamelCase"),
        ("1PasswordCamelCase", "1PasswordCamelCase"),
        ("mixedCASETYPING", "MixedCASETYPING"),
        ("star*Patrol", "StarPatrol"),
        ("APIHowdy", "APIHowdy"),
        ("2fast2furious", "2Fast2Furious"),
        ("date_created", "DateCreated"),
    ])
    def test_title_name(self, before, expected):
        assert to_title_name(before) == expected


class TestValidHclIdentifier:
    def test_valid(self):
        assert valid_hcl_identifier("image_boards")
        assert valid_hcl_identifier("image-boards2")

    def test_invalid(self):
        assert not valid_hcl_identifier("")
        assert not valid_hcl_identifier("2boards")
        assert not valid_hcl_identifier("image boards")
