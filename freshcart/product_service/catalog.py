# product_service/catalog.py
# statyczny katalog sklepu (dev)

_UNSPLASH = "https://images.unsplash.com/"


def _product(id, name, price, category, image, rating, reviews, stock, badges, express=False, new=False):
    return {
        "id": id,
        "name": name,
        "price": price,
        "category": category,
        "image": _UNSPLASH + image,
        "rating": rating,
        "reviews": reviews,
        "stock": stock,
        "badges": badges,
        "is_express": express,
        "is_newly_added": new,
    }


PRODUCTS = {
    p["id"]: p
    for p in [
        _product("1", "Fresh Organic Apples", "3.99", "Fruits", "photo-1560806887-1e4cd0b6cbd6", 4.5, 128, 50, ["Organic"], express=True),
        _product("2", "Farm Fresh Whole Milk", "4.49", "Dairy", "photo-1563636619-e9143da7973b", 4.8, 95, 30, ["No Additives"], express=True),
        _product("3", "Fresh Spinach Bundle", "2.99", "Vegetables", "photo-1576045057995-568f588f82fb", 4.3, 76, 45, ["Organic"], new=True),
        _product("4", "Artisan Sourdough Bread", "5.99", "Bakery", "photo-1585478259715-4d3a7c8bf5aa", 4.9, 152, 20, ["Artisan", "No Additives"]),
        _product("5", "Cage-Free Large Eggs", "5.49", "Dairy", "photo-1564149504298-00c8f01f2c7d", 4.7, 89, 40, ["Cage-Free"], express=True),
        _product("6", "Wild-Caught Salmon Fillets", "12.99", "Seafood", "photo-1519708227418-c8fd9a32b7a2", 4.6, 64, 15, ["Wild-Caught", "Sustainable"], new=True),
        _product("7", "Organic Baby Carrots", "2.49", "Vegetables", "photo-1447175008436-054170c2e979", 4.2, 51, 60, ["Organic"], express=True),
        _product("8", "Greek Yogurt Plain", "4.99", "Dairy", "photo-1488477181946-6428a0291777", 4.8, 107, 25, ["High Protein"]),
        _product("9", "Grass-Fed Ground Beef", "8.99", "Meat", "photo-1588168333986-5078d3ae3976", 4.7, 78, 20, ["Grass-Fed", "No Antibiotics"], express=True),
        _product("10", "Organic Avocados", "6.99", "Fruits", "photo-1519162808019-7de1683fa2ad", 4.9, 132, 40, ["Organic", "Superfood"], express=True, new=True),
        _product("11", "Organic Quinoa", "7.49", "Grains", "photo-1612439169231-e31e1190e275", 4.5, 95, 30, ["Organic", "Gluten-Free"]),
        _product("12", "Dark Chocolate Bar 85%", "3.99", "Snacks", "photo-1548907040-4baa42d10919", 4.6, 118, 50, ["Fair Trade", "Vegan"]),
    ]
}
