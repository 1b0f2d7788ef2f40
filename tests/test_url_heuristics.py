"""Tests for URL heuristics."""

from product_meta.models import UrlComponents
from product_meta.services import url_heuristics


class TestExtract:
    """Domain, product name, id and params from real-world product URLs."""

    def test_nordstrom_slug_and_numeric_id(self):
        result = url_heuristics.extract("https://www.nordstrom.com/s/straw-shoulder-bag/8461451")

        assert result == UrlComponents(
            domain="nordstrom",
            product_name="straw shoulder bag",
            product_id="8461451",
            query_params=(),
        )

    def test_lululemon_longest_slug_wins_and_numeric_color_dropped(self):
        url = (
            "https://www.lululemon.com/en-us/p/pace-breaker-short-NF-7-lined-update/"
            "prod11400110?color=71300"
        )
        result = url_heuristics.extract(url)

        assert result.domain == "lululemon"
        assert result.product_name == "pace breaker short NF 7 lined update"
        assert result.product_id == "prod11400110"
        assert result.query_params == ()

    def test_sephora_numeric_sku_id_kept(self):
        url = "https://www.sephora.com/product/triclone-skin-tech-foundation-P502185?skuId=2597045"
        result = url_heuristics.extract(url)

        assert result.domain == "sephora"
        assert result.product_name == "triclone skin tech foundation P502185"
        assert result.product_id is None
        assert result.query_params == ("skuid 2597045",)

    def test_subdomain_uses_brand_label(self):
        result = url_heuristics.extract("https://shop.lululemon.com/p/men-shorts/Pace-Breaker-Short/_/prod1")

        assert result.domain == "lululemon"
        assert result.product_name == "Pace Breaker Short"
        assert result.product_id == "prod1"

    def test_target_skips_dash_and_a_prefixed_segments(self):
        result = url_heuristics.extract("https://www.target.com/p/kitchen-towel-set/-/A-12345")

        assert result.domain == "target"
        assert result.product_name == "kitchen towel set"
        assert result.product_id is None

    def test_ties_keep_first_slug(self):
        result = url_heuristics.extract("https://example.com/blue-mugs/red-mugs")

        assert result.product_name == "blue mugs"

    def test_id_after_slug_overrides_earlier_id(self):
        result = url_heuristics.extract("https://example.com/12345/ceramic-mug-set/67890")

        assert result.product_id == "67890"

    def test_no_path_returns_empty(self):
        assert url_heuristics.extract("https://example.com/") == UrlComponents.empty()

    def test_no_slug_returns_empty_even_with_id(self):
        result = url_heuristics.extract("https://www.example.com/item/123456")

        assert result.is_empty
        assert result.domain is None
        assert result.product_id is None

    def test_unparseable_url_returns_empty(self):
        assert url_heuristics.extract("not a url") == UrlComponents.empty()
        assert url_heuristics.extract("http://[::1/bad-slug-here") == UrlComponents.empty()

    def test_special_characters_removed_from_name(self):
        result = url_heuristics.extract("https://www.etsy.com/listing/123456/vintage-ceramic-mug!!")

        assert result.product_name == "vintage ceramic mug"
        assert result.product_id == "123456"


class TestExtractDomain:
    def test_single_label_host(self):
        assert url_heuristics.extract_domain("localhost") == "localhost"

    def test_www_prefix_stripped(self):
        assert url_heuristics.extract_domain("www.etsy.com") == "etsy"

    def test_mobile_subdomain(self):
        assert url_heuristics.extract_domain("m.nike.com") == "nike"


class TestExtractQueryParams:
    def test_whitelist_and_order(self):
        params = url_heuristics.extract_query_params("utm_source=mail&Color=Black&size=M&ref=abc")

        assert params == ["color Black", "size M"]

    def test_values_are_url_decoded(self):
        assert url_heuristics.extract_query_params("colour=Navy%20Blue") == ["colour Navy Blue"]

    def test_numeric_size_dropped_numeric_sku_kept(self):
        params = url_heuristics.extract_query_params("size=10&sku=98765")

        assert params == ["sku 98765"]

    def test_empty_and_malformed_pairs_skipped(self):
        assert url_heuristics.extract_query_params("color=&style&variant=a=b") == []
