from hostsweep.utils.input_utils import read_lines, combine_wordlist_with_domains, parse_status_codes


def test_read_lines_trims_and_skips_blanks(tmp_path):
    path = tmp_path / "domains.txt"
    path.write_text("example.com\n\n  test.example.com  \n\t\nadmin.example.com")
    assert read_lines(str(path)) == ["example.com", "test.example.com", "admin.example.com"]


def test_combine_domain_major_order():
    combined = combine_wordlist_with_domains(["a.com", "b.org"], ["www", "api", "dev"])
    assert combined == [
        "www.a.com", "api.a.com", "dev.a.com",
        "www.b.org", "api.b.org", "dev.b.org",
    ]
    assert len(combined) == 2 * 3


def test_combine_without_wordlist_passes_domains_through():
    domains = ["a.com", "b.org"]
    assert combine_wordlist_with_domains(domains, []) == domains
    assert combine_wordlist_with_domains(domains, None) == domains


def test_parse_status_codes():
    assert parse_status_codes("200,301, 302,403") == {200, 301, 302, 403}
    assert parse_status_codes("200,abc,,404") == {200, 404}
    assert parse_status_codes("") == set()
    assert parse_status_codes(None) == set()
