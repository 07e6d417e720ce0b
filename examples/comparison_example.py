"""
Example comparing ground tracks flown with different step sizes and banks.
"""

import logging

from groundtrack import (
    TrackAnalyzer,
    TurnParameters,
    TurnRadiusRequest,
    TurnRadiusWorker,
    simulate_turn_to_heading,
)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("Ground Track Estimator - Track Comparison")
    print("=" * 80)

    analyzer = TrackAnalyzer()
    base = TurnParameters(ktas=150, roll_rate=3, initial_bank=0, max_bank=30, initial_heading=0,
                          wind_direction=300, wind_speed=25)

    print("\nSimulating 180 degree turns...")
    for dt in (1.0, 0.5, 0.1):
        result = simulate_turn_to_heading(base, target_heading=180, dt=dt)
        analyzer.add_track(f"dt={dt:g}s", result.track)

    for bank in (15, 45):
        result = simulate_turn_to_heading(base.with_max_bank(bank), target_heading=180, dt=0.5)
        analyzer.add_track(f"bank={bank}", result.track)

    print()
    analyzer.print_comparison()

    stats = analyzer.get_statistics()
    print("\nStatistics:")
    print(f"  Tracks:            {stats['num_tracks']}")
    print(f"  Duration range:    {stats['duration']['min']:.1f}s - {stats['duration']['max']:.1f}s")
    print(f"  Avg displacement:  {stats['displacement']['avg']:.3f} NM")

    # Still-air preview paths computed off the main thread
    print("\nStill-air preview paths:")
    with TurnRadiusWorker() as worker:
        futures = [
            worker.submit(TurnRadiusRequest(ktas=150, max_bank=bank, roll_rate=3, heading=0, duration=60))
            for bank in (15, 30, 45)
        ]
        for future in futures:
            response = future.result()
            end_x, end_y = response.points[-1]
            print(f"  Request {response.request_id}: radius {response.turn_radius:.3f} NM, "
                  f"ends at ({end_x:.3f}, {end_y:.3f}) NM")

    output_file = "track_comparison.json"
    analyzer.export_to_json(output_file)
    print(f"\nResults exported to {output_file}")
    analyzer.visualize(save_path="track_comparison.png")

    print("\n" + "=" * 80)
    print("Comparison completed!")
    print("=" * 80)


if __name__ == "__main__":
    main()
