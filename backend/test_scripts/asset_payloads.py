"""
Sample create-request bodies (camelCase wire format), one per category.

Every optional field is filled in so that round-trip tests cover the whole
detail field set.
"""
import copy

DEFAULT_OWNERS = [{"userId": "u1", "percentage": 60}, {"userId": "u2", "percentage": 40}]

FULL_PAYLOADS = {
    "real-estate": {
        "propertyName": "Villa Lago",
        "propertyType": "House",
        "location": "Como",
        "plotNumber": "P-12",
        "areaSqFt": 2400.5,
        "purchaseDate": "2015-06-01",
        "purchasePrice": 850000,
        "currentValue": 1100000,
        "valuationDate": "2024-12-31",
        "rentalIncome": 36000,
        },
    "vehicle": {
        "vehicleName": "BMW X5",
        "vehicleType": "car",
        "make": "BMW",
        "model": "X5",
        "year": 2021,
        "registrationNumber": "AB123CD",
        "purchasePrice": 300000,
        "purchaseDate": "2021-03-15",
        "currentValue": 280000,
        "outstandingLoan": 50000.5,
        },
    "bank-account": {
        "accountName": "Household",
        "bankName": "Intesa",
        "accountNumber": "IT60X0542811101000000123456",
        "accountType": "Savings",
        "currentBalance": 12500.75,
        "interestRate": 1.25,
        "openingDate": "2010-01-04",
        },
    "investment": {
        "investmentName": "Global ETF",
        "broker": "Directa",
        "accountNumber": "D-998",
        "investmentType": "ETF",
        "initialInvestment": 20000,
        "investmentDate": "2019-09-01",
        "currentValue": 31234.56,
        "lastUpdated": "2025-01-15",
        },
    "business": {
        "businessName": "Rossi Srl",
        "licenseNumber": "LIC-77",
        "industry": "Food",
        "entityType": "LLC",
        "initialInvestment": 150000,
        "establishmentDate": "2005-05-05",
        "currentValuation": 900000,
        "annualRevenue": 1200000,
        },
    "other": {
        "assetName": "Grandma's ring",
        "assetCategory": "Jewellery",
        "description": "18k gold, engraved",
        "purchasePrice": 1500,
        "purchaseDate": "1990-01-01",
        "currentValuation": 4200,
        "valuationDate": "2024-06-30",
        },
    }

EXPECTED_CATEGORY = {
    "real-estate": "REAL_ESTATE",
    "vehicle": "VEHICLE",
    "bank-account": "BANK_ACCOUNT",
    "investment": "INVESTMENT",
    "business": "BUSINESS",
    "other": "OTHER",
    }


def full_payload(slug: str, owners=None) -> dict:
    """Deep copy of the full payload for a category, with owners attached."""
    body = copy.deepcopy(FULL_PAYLOADS[slug])
    body["owners"] = copy.deepcopy(owners if owners is not None else DEFAULT_OWNERS)
    return body


def bmw_payload(owners=None) -> dict:
    """The minimal BMW X5 vehicle request (required fields only)."""
    return {
        "vehicleName": "BMW X5",
        "vehicleType": "car",
        "purchasePrice": 300000,
        "currentValue": 280000,
        "owners": copy.deepcopy(owners if owners is not None else DEFAULT_OWNERS),
        }
