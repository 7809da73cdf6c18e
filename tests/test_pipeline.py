import pipeline


def _write_inputs(tmp_path):
    interactions = tmp_path / "user_activity.csv"
    products = tmp_path / "product.csv"
    interactions.write_text("user_id,product_id\n1,A\n1,B\n2,A\n2,C\n", encoding="utf-8")
    products.write_text(
        "product_id,category,price_range,brand\nA,shoes,mid,Acme\nB,shoes,low,Acme\nC,hats,low,Hatco\n",
        encoding="utf-8",
    )
    return str(interactions), str(products)


def test_main_prints_three_lists(tmp_path, capsys):
    interactions, products = _write_inputs(tmp_path)

    code = pipeline.main(["--interactions", interactions, "--products", products, "--user", "1"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Recommendations for User 1: ['product_C']" in out
    assert "Content-Based Recommendations for User 1: []" in out
    assert "Popularity-Based Recommendations: ['product_A', 'product_B', 'product_C']" in out


def test_main_unknown_user_falls_back(tmp_path, capsys):
    interactions, products = _write_inputs(tmp_path)

    code = pipeline.main(["--interactions", interactions, "--products", products, "--user", "99"])

    out = capsys.readouterr().out
    assert code == 0
    assert "User 99 has no history" in out
    assert "Popularity-Based Recommendations: ['product_A', 'product_B', 'product_C']" in out


def test_main_malformed_input_exits_non_zero(tmp_path, capsys):
    interactions = tmp_path / "bad.csv"
    interactions.write_text("user_id,product_id\n1\n", encoding="utf-8")
    _, products = _write_inputs(tmp_path)

    code = pipeline.main(["--interactions", str(interactions), "--products", products])

    assert code == 1
    assert "row 2" in capsys.readouterr().err
