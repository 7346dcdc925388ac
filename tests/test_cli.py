import pandas as pd

from models.product import Product
from models.shop import Shop
from models import db


def test_import_products_command(app, tmp_path):
    shop = Shop(name="Green Mart")
    db.session.add(shop)
    db.session.commit()
    path = tmp_path / "products.csv"
    pd.DataFrame([
        {"name": "Milk", "price": 198, "shop": "Green Mart"},
        {"name": "Bread", "price": 150, "shop": "Elsewhere"},
    ]).to_csv(path, index=False)

    result = app.test_cli_runner().invoke(args=["import-products", str(path)])
    assert result.exit_code == 0, result.output
    assert "1 products imported, 1 rows skipped." in result.output
    assert Product.query.filter_by(name="Milk").count() == 1


def test_import_products_command_reports_bad_file(app, tmp_path):
    path = tmp_path / "products.txt"
    path.write_text("name,price\n")
    result = app.test_cli_runner().invoke(args=["import-products", str(path)])
    assert result.exit_code != 0
    assert "Unsupported file type" in result.output
