from __future__ import annotations

# Sample catalog used when no directory service is configured.
STATION_RECORDS: list[dict] = [
    {
        "id": "1",
        "name": "Tata Power EZ Charge - Connaught Place",
        "address": "Block A, Connaught Place, New Delhi",
        "distance": 0.8,
        "status": "available",
        "chargerTypes": ["CCS2", "Type 2 AC"],
        "amenities": ["Restaurant", "WiFi", "Shopping"],
        "availableChargers": 6,
        "totalChargers": 8,
        "pricePerKwh": 18.0,
        "coordinates": {"lat": 28.6315, "lng": 77.2167},
    },
    {
        "id": "2",
        "name": "Statiq Fast Charging Hub",
        "address": "Sector 18, Noida, Uttar Pradesh",
        "distance": 2.5,
        "status": "busy",
        "chargerTypes": ["CCS2", "CHAdeMO"],
        "amenities": ["Parking", "Coffee"],
        "availableChargers": 1,
        "totalChargers": 6,
        "pricePerKwh": 21.5,
        "coordinates": {"lat": 28.5708, "lng": 77.3261},
    },
    {
        "id": "3",
        "name": "ChargeZone Cyber Hub",
        "address": "DLF Cyber City, Gurugram, Haryana",
        "distance": 4.2,
        "status": "available",
        "chargerTypes": ["CCS2", "Bharat DC001"],
        "amenities": ["Restaurant", "WiFi", "Coffee", "ATM"],
        "availableChargers": 4,
        "totalChargers": 4,
        "pricePerKwh": 19.0,
        "coordinates": {"lat": 28.4950, "lng": 77.0895},
    },
    {
        "id": "4",
        "name": "EESL Public Charger - Lodhi Road",
        "address": "Lodhi Road, New Delhi",
        "distance": 6.1,
        "status": "available",
        "chargerTypes": ["Bharat AC001", "15A Socket"],
        "amenities": ["Parking"],
        "availableChargers": 2,
        "totalChargers": 3,
        "pricePerKwh": 10.8,
        "coordinates": {"lat": 28.5892, "lng": 77.2273},
    },
    {
        "id": "5",
        "name": "Jio-bp pulse Dwarka",
        "address": "Sector 21, Dwarka, New Delhi",
        "distance": 12.3,
        "status": "offline",
        "chargerTypes": ["CCS2", "Type 2 AC"],
        "amenities": ["Coffee", "Shopping"],
        "availableChargers": 0,
        "totalChargers": 4,
        "pricePerKwh": 20.0,
        "coordinates": {"lat": 28.5523, "lng": 77.0583},
    },
]
