from lapscout.utils.money import detect_currency, format_price, parse_price, parse_price_with_currency

def test_parse_price():
    assert parse_price("$1,299.00") == 1299.0
    assert parse_price("from $999") == 999.0
    assert parse_price("1,049.5") == 1049.5
    assert parse_price("N/A") is None
    assert parse_price("") is None

def test_currency():
    assert detect_currency("£899") == "£"
    assert detect_currency("1299 USD") == "$"
    assert detect_currency("1299", default="€") == "€"
    assert parse_price_with_currency("£1,099") == (1099.0, "£")

def test_format_price():
    assert format_price(1299.0) == "$1,299"
    assert format_price(1299.5, "£") == "£1,299.50"
