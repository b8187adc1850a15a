"""Conjunto de dados reutilizável para cenários de teste backend."""

TEST_JWT_SECRET = "testsecrettestsecrettestsecrettestsecret"

HAPPY_PATH_USER = {
    "email": "a@x.com",
    "username": "alice",
    "password": "s3cret-pass",
}

OTHER_USER = {
    "email": "bob@example.com",
    "username": "bob",
    "password": "another-pass",
}

HAPPY_PATH_CAR = {
    "make": "Toyota",
    "model": "Corolla",
    "year": 2022,
    "price_per_day": 50.0,
}

ORDER_TOTAL_PRICE = "150.00"
