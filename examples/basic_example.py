"""
Basic example of estimating a ground track.
"""

import logging

from groundtrack import (
    GeoPoint,
    TurnParameters,
    calculate_turn_radius,
    simulate_turn_to_heading,
    simulate_turn_to_time,
    track_to_geopoints,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("Ground Track Estimator - Basic Example")
    print("=" * 80)

    params = TurnParameters(
        ktas=150,
        roll_rate=3,
        initial_bank=0,
        max_bank=30,
        initial_heading=0,
        wind_direction=270,
        wind_speed=20,
    )
    print(f"\nAirspeed: {params.ktas} kt, bank {params.max_bank} deg at {params.roll_rate} deg/s")
    print(f"Wind: {params.wind_speed} kt from {params.wind_direction:.0f}")
    print(f"Still-air turn radius: {calculate_turn_radius(params.max_bank, params.ktas):.3f} NM")

    # Fly the turn for a fixed time
    print("\n" + "-" * 80)
    print("Turning for 30 seconds...")
    track = simulate_turn_to_time(params, duration=30, dt=0.5)
    last = track[-1]
    print(f"Points: {len(track)}")
    print(f"Position: ({last.x:.3f}, {last.y:.3f}) NM")
    print(f"Heading: {last.heading:.1f} deg, bank {last.bank_angle:.1f} deg")
    print(f"Ground speed: {last.ground_speed:.1f} kt, track {last.ground_track:.1f} deg")
    print(f"Roll out now and settle on: {last.expected_roll_out_heading:.1f} deg")

    start_lat, start_lon = 37.5665, 126.9780
    lat, lon = track_to_geopoints(track, GeoPoint.from_deg(start_lat, start_lon))[-1].to_deg()
    print(f"Lat/lon: {start_lat:.4f}, {start_lon:.4f} -> {lat:.4f}, {lon:.4f}")

    # Turn to a heading
    print("\n" + "-" * 80)
    print("Turning to heading 090...")
    result = simulate_turn_to_heading(params, target_heading=90, dt=0.5)
    summary = result.get_summary()
    print(f"Begin roll-out at: {summary['roll_out_heading']:.1f} deg")
    print(f"Heading swept rolling out: {summary['roll_out_heading_change']:.1f} deg")
    print(f"Bank flown: {summary['effective_max_bank']:.1f} deg")
    print(f"Final heading: {summary['final_heading']:.1f} deg after {summary['duration']:.1f}s")
    print(f"Stopped because: {summary['termination_reason']}")

    print("\n" + "=" * 80)
    print("Example completed!")
    print("=" * 80)


if __name__ == "__main__":
    main()
