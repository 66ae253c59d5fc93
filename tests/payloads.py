CARD_TOKEN = {
    "id": "tok_1AbCdEfGhIjKlMnO",
    "object": "token",
    "card": {
        "id": "card_1AbCdEfGhIjKlMnO",
        "object": "card",
        "address_city": None,
        "address_country": None,
        "address_line1": None,
        "address_line1_check": None,
        "address_line2": None,
        "address_state": None,
        "address_zip": "94107",
        "address_zip_check": "unchecked",
        "brand": "Visa",
        "country": "US",
        "cvc_check": "unchecked",
        "dynamic_last4": None,
        "exp_month": 8,
        "exp_year": 2030,
        "fingerprint": "Xt5EWLLDS7FJjR1c",
        "funding": "credit",
        "last4": "4242",
        "metadata": {},
        "name": None,
        "tokenization_method": None,
    },
    "client_ip": "203.0.113.7",
    "created": 1474652545,
    "livemode": False,
    "type": "card",
    "used": False,
}

BANK_ACCOUNT_TOKEN = {
    "id": "btok_9CUjBdCw1xiKN1",
    "object": "token",
    "bank_account": {
        "id": "ba_9CUjR7gQ6bSGOX",
        "object": "bank_account",
        "account_holder_name": "Jane Austen",
        "account_holder_type": "individual",
        "bank_name": "STRIPE TEST BANK",
        "country": "US",
        "currency": "usd",
        "fingerprint": "1JWtPxqbdX5Gamtc",
        "last4": "6789",
        "routing_number": "110000000",
        "status": "new",
    },
    "client_ip": None,
    "created": 1474652545,
    "livemode": False,
    "type": "bank_account",
    "used": False,
}

PII_TOKEN = {
    "id": "pii_1AbCdEf",
    "object": "token",
    "client_ip": None,
    "created": 1474652545,
    "livemode": True,
    "type": "pii",
    "used": True,
}
