from httpx import AsyncClient


async def login(client: AsyncClient, email: str, **claims) -> str:
    """POST /jwt; the client keeps the cookie for the following requests."""
    response = await client.post("/jwt", json={"email": email, **claims})
    assert response.status_code == 200
    return response.json()["token"]


async def book(client: AsyncClient, hotel_id: str, booking_date: str, email: str, **extra):
    return await client.post(
        "/bookings",
        json={"hotelId": hotel_id, "bookingDate": booking_date, "userEmail": email, **extra},
    )
