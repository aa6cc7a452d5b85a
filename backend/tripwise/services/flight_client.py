"""Flight search client - Sky-Scrapper (RapidAPI) adapter with mock fallback."""

import asyncio
import hashlib
import logging
import random
from datetime import date, datetime, timedelta

import httpx

from tripwise.config import settings
from tripwise.schemas.flight import FlightOption, FlightPriceSelection, FlightSearchResponse

logger = logging.getLogger(__name__)

AIRLINE_NAMES = {
    "AA": "American Airlines", "DL": "Delta Air Lines", "UA": "United Airlines",
    "B6": "JetBlue Airways", "AS": "Alaska Airlines", "WN": "Southwest Airlines",
    "BA": "British Airways", "LH": "Lufthansa", "AF": "Air France", "KL": "KLM",
    "EK": "Emirates", "QR": "Qatar Airways", "SQ": "Singapore Airlines",
    "TG": "Thai Airways", "NH": "ANA", "JL": "Japan Airlines", "TK": "Turkish Airlines",
    "IB": "Iberia", "LX": "Swiss", "AC": "Air Canada",
}

# City -> sky id, used when the airport lookup is unavailable
MOCK_SKY_IDS = {
    "new york": "NYCA", "nyc": "NYCA", "jfk": "NYCA",
    "los angeles": "LAXA", "la": "LAXA", "lax": "LAXA",
    "london": "LOND", "paris": "PARI", "tokyo": "TYOA",
    "miami": "MIAM", "chicago": "CHIA",
}

CABIN_MULTIPLIERS = {"economy": 1.0, "premium_economy": 1.8, "business": 3.5, "first": 6.0}


class FlightSearchClient:
    """Adapter for the Sky-Scrapper flight search API."""

    def __init__(self, api_key: str | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self._api_key = settings.rapidapi_key if api_key is None else api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._use_mock = not self._api_key

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=settings.rapidapi_base_url,
                timeout=settings.flight_search_timeout,
                headers={
                    "X-RapidAPI-Key": self._api_key,
                    "X-RapidAPI-Host": settings.rapidapi_host,
                },
                transport=self._transport,
            )
        return self._client

    async def _get(self, path: str, params: dict) -> dict:
        """GET with up to three attempts, backing off on 429 and network errors."""
        client = await self._get_client()
        for attempt in range(3):
            try:
                resp = await client.get(path, params=params)
                if resp.status_code == 429 and attempt < 2:
                    await asyncio.sleep(2 ** attempt)
                    continue
                resp.raise_for_status()
                return resp.json()
            except httpx.RequestError:
                if attempt < 2:
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise
        return {}

    async def _resolve_airport(self, query: str) -> tuple[str, str]:
        """Return (sky id, entity id) for a free-text location."""
        if self._use_mock:
            code = self._mock_sky_id(query)
            return code, code

        try:
            data = await self._get("/flights/searchAirport", {"query": query})
            entries = data.get("data") if isinstance(data, dict) else None
            if not isinstance(entries, list) or not entries or not isinstance(entries[0], dict):
                raise ValueError(f"unexpected airport payload: {data!r:.200}")
            first = entries[0]
            sky_id = first.get("skyId") or query
            entity_id = first.get("entityId") or sky_id
            return str(sky_id), str(entity_id)
        except (httpx.HTTPError, ValueError, AttributeError, KeyError, TypeError) as e:
            logger.error(f"Airport search failed for {query!r}: {e}")
            code = self._mock_sky_id(query)
            return code, code

    async def get_airport_code(self, query: str) -> str:
        sky_id, _ = await self._resolve_airport(query)
        return sky_id

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        adults: int = 1,
        cabin_class: str = "economy",
    ) -> list[FlightOption]:
        """One-way search; at most `flight_search_max_results` options."""
        limit = settings.flight_search_max_results
        origin_sky, origin_entity = await self._resolve_airport(origin)
        dest_sky, dest_entity = await self._resolve_airport(destination)

        if self._use_mock:
            logger.warning("RapidAPI key not configured, using mock flights")
            return self._generate_mock_flights(origin_sky, dest_sky, departure_date, cabin_class)[:limit]

        try:
            data = await self._get(
                "/flights/searchFlights",
                {
                    "originSkyId": origin_sky,
                    "destinationSkyId": dest_sky,
                    "originEntityId": origin_entity,
                    "destinationEntityId": dest_entity,
                    "date": departure_date.isoformat(),
                    "cabinClass": cabin_class,
                    "adults": adults,
                    "sortBy": "best",
                    "currency": settings.currency,
                    "market": "en-US",
                    "countryCode": "US",
                },
            )
            itineraries = (data.get("data") or {}).get("itineraries") or []
            flights = [self._parse_itinerary(it, cabin_class) for it in itineraries]
            flights = [f for f in flights if f is not None]
            if flights:
                return flights[:limit]
            logger.warning(f"No flights returned for {origin_sky}-{dest_sky}, using mock flights")
        except (httpx.HTTPError, ValueError, AttributeError, KeyError, TypeError) as e:
            logger.error(f"Flight search failed, falling back to mock: {e}")

        return self._generate_mock_flights(origin_sky, dest_sky, departure_date, cabin_class)[:limit]

    async def search_round_trip(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        return_date: date | None = None,
        adults: int = 1,
        cabin_class: str = "economy",
    ) -> FlightSearchResponse:
        """Outbound search plus an inbound search when a return date is given."""
        outbound = await self.search_flights(origin, destination, departure_date, adults, cabin_class)
        inbound: list[FlightOption] = []
        if return_date is not None:
            inbound = await self.search_flights(destination, origin, return_date, adults, cabin_class)

        return FlightSearchResponse(
            origin_code=outbound[0].origin_airport if outbound else await self.get_airport_code(origin),
            destination_code=outbound[0].destination_airport if outbound else await self.get_airport_code(destination),
            outbound=outbound,
            inbound=inbound,
            price_selection=to_price_selection(outbound, inbound),
        )

    def _parse_itinerary(self, itinerary: dict, cabin_class: str) -> FlightOption | None:
        """Parse a Sky-Scrapper itinerary into a FlightOption."""
        legs = itinerary.get("legs") or []
        if not legs:
            return None
        leg = legs[0]

        price_info = itinerary.get("price") or {}
        price = price_info.get("amount", price_info.get("raw"))
        if price is None:
            return None

        carrier = leg.get("marketingCarrier")
        if carrier is None:
            marketing = (leg.get("carriers") or {}).get("marketing") or [{}]
            carrier = marketing[0]
        code = carrier.get("displayCode") or carrier.get("alternateId") or "XX"

        origin = leg.get("origin") or {}
        destination = leg.get("destination") or {}
        deep_link = None
        for option in itinerary.get("bookingOptions") or []:
            items = option.get("bookingItems") or []
            if items:
                deep_link = items[0].get("deepLink")
                break

        return FlightOption(
            id=str(itinerary.get("id", "")),
            airline_code=code,
            airline_name=carrier.get("name") or AIRLINE_NAMES.get(code, "Unknown Airline"),
            origin_airport=origin.get("displayCode") or origin.get("id", ""),
            destination_airport=destination.get("displayCode") or destination.get("id", ""),
            departure_time=leg.get("departure", ""),
            arrival_time=leg.get("arrival", ""),
            duration_minutes=int(leg.get("durationInMinutes") or 0),
            stops=int(leg.get("stopCount") or 0),
            price=float(price),
            currency=price_info.get("currency", settings.currency),
            cabin_class=cabin_class,
            booking_link=deep_link,
        )

    @staticmethod
    def _mock_sky_id(query: str) -> str:
        return MOCK_SKY_IDS.get(query.strip().lower(), query.strip().upper())

    # --- Mock data generation for demo mode ---

    def _generate_mock_flights(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        cabin_class: str,
    ) -> list[FlightOption]:
        """Deterministic mock flights seeded from route, date and cabin."""
        seed_str = f"{origin}{destination}{departure_date.isoformat()}{cabin_class}"
        seed = int(hashlib.md5(seed_str.encode()).hexdigest()[:8], 16)
        rng = random.Random(seed)

        base = 450 * CABIN_MULTIPLIERS.get(cabin_class, 1.0)
        airlines = list(AIRLINE_NAMES)
        flights = []

        for i in range(rng.randint(4, 8)):
            airline = rng.choice(airlines)
            stops = rng.choices([0, 1, 2], weights=[55, 35, 10])[0]
            duration = rng.randint(150, 720) + stops * rng.randint(45, 120)
            dep = datetime(
                departure_date.year, departure_date.month, departure_date.day,
                rng.randint(6, 21), rng.choice([0, 15, 30, 45]),
            )
            arr = dep + timedelta(minutes=duration)
            flights.append(FlightOption(
                id=f"mock_{origin}_{destination}_{departure_date.isoformat()}_{i}",
                airline_code=airline,
                airline_name=AIRLINE_NAMES[airline],
                origin_airport=origin,
                destination_airport=destination,
                departure_time=dep.isoformat(),
                arrival_time=arr.isoformat(),
                duration_minutes=duration,
                stops=stops,
                price=round(base * rng.uniform(0.7, 1.6), 2),
                currency=settings.currency,
                cabin_class=cabin_class,
                booking_link=f"https://www.skyscanner.com/transport/flights/{origin.lower()}/{destination.lower()}/",
                is_mock=True,
            ))

        return sorted(flights, key=lambda f: f.price)

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


def to_price_selection(
    outbound: list[FlightOption], inbound: list[FlightOption] | None = None
) -> FlightPriceSelection | None:
    """Cheapest outbound (and inbound, if searched) fares as a price selection."""
    if not outbound:
        return None
    out = min(outbound, key=lambda f: f.price)
    ret = min(inbound, key=lambda f: f.price) if inbound else None
    return FlightPriceSelection(
        outbound=out.price,
        return_fare=ret.price if ret else None,
        currency=out.currency,
    )


flight_client = FlightSearchClient()
