"""
sample_data.py

Sample investments used on first start and by "reset to default".
Replace with your own data when using the application.
"""

SAMPLE_INVESTMENTS = {
    "US": [
        {"id": "us1", "name": "US Stock Fund", "asset_type": "Stocks", "amount": 100000, "return_rate": 8.0},
        {"id": "us2", "name": "401K", "asset_type": "401K", "amount": 150000, "return_rate": 7.0},
        {"id": "us3", "name": "Savings Account", "asset_type": "Cash", "amount": 50000, "return_rate": 1.5},
    ],
    "India": [
        {"id": "in1", "name": "Property Investment", "asset_type": "Real Estate", "amount": 200000, "return_rate": 5.0},
    ],
    "Property": [],
}
