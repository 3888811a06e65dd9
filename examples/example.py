"""Example usage of OBAClient and BusStopTracker."""

import logging
import sys
from pathlib import Path

# Add src to path so we can import obatrack
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from obatrack import BusStopTracker, OBAClient, load_config
from obatrack.display import arrival_badge, stop_label

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_stations(tracker: BusStopTracker):
    """Fetch and display the configured stations."""
    print("Fetching bus stations...")

    state = tracker.load_stations()
    if state.error:
        print(f"Error: {state.error}")
        return []
    if not state.items:
        print("\nNo bus stations found. Check the API connection.")
        return []

    print(f"\n{'='*70}")
    for index, station in enumerate(state.items, start=1):
        print(f"{index}. {station.name}")
        print(f"   ID: {station.id}")
        print(f"   Code: {station.code or 'N/A'}")
        print(f"   Location: {station.lat}, {station.lon}")
        print(f"   Direction: {station.direction or 'N/A'}")
        print()
    print(f"Total stations found: {len(state.items)}")
    print(f"{'='*70}\n")
    return state.items


def print_arrivals(tracker: BusStopTracker, station):
    """Fetch and display upcoming arrivals for one station."""
    print(f"\n{station.name}")
    label = stop_label(station)
    if label:
        print(label)
    print("-" * 70)

    state = tracker.load_arrivals(station)
    if state.error:
        print(f"  {state.error}")
    elif state.empty:
        print("  No arrivals found")
    for arrival in state.items:
        print(f"  {arrival.route_name:>4}  {arrival_badge(arrival):>7}  → {arrival.trip_headsign}")


def main():
    stop_ids = sys.argv[1:]
    config = load_config()

    with OBAClient(config=config) as client:
        tracker = BusStopTracker(client)
        try:
            if stop_ids:
                stations = [s for s in print_stations(tracker) if s.id in stop_ids]
            else:
                stations = print_stations(tracker)
            for station in stations:
                print_arrivals(tracker, station)
        except KeyboardInterrupt:
            print("\n\nGoodbye!")
        except Exception as e:
            logger.error(f"Failed to fetch data: {e}", exc_info=True)
            print(f"Error: {e}")
            sys.exit(1)


if __name__ == "__main__":
    main()
