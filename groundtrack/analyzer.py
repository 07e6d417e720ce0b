"""
Analyzer for summarizing and comparing simulated ground tracks.
"""

import json
from math import hypot
from typing import Any, Dict, List, Optional

import pandas as pd

from .models import TrackPoint, TurnPhase
from .utils import heading_delta


def summarize_track(track: List[TrackPoint]) -> Dict[str, Any]:
    """
    Summary metrics of one track.

    Returns:
        Dictionary with duration, net heading change, peak bank, path length,
        final displacement and time spent in each phase
    """
    if not track:
        return {}

    heading_change = sum(
        heading_delta(prev.heading, cur.heading) for prev, cur in zip(track, track[1:])
    )
    path_length = sum(
        hypot(cur.x - prev.x, cur.y - prev.y) for prev, cur in zip(track, track[1:])
    )
    phase_time = {phase.value: 0.0 for phase in TurnPhase}
    for prev, cur in zip(track, track[1:]):
        phase_time[cur.phase.value] += cur.time - prev.time

    last = track[-1]
    return {
        "points": len(track),
        "duration": last.time,
        "heading_change": heading_change,
        "final_heading": last.heading,
        "final_bank": last.bank_angle,
        "max_bank": max(abs(p.bank_angle) for p in track),
        "path_length": path_length,
        "displacement": hypot(last.x, last.y),
        "final_position": (last.x, last.y),
        "phase_time": phase_time,
    }


def track_to_dataframe(track: List[TrackPoint]) -> pd.DataFrame:
    """One row per track point, phase as its string value."""
    columns = [
        "time", "x", "y", "heading", "bank_angle", "ground_speed_x",
        "ground_speed_y", "phase", "expected_roll_out_heading",
    ]
    return pd.DataFrame([point.to_dict() for point in track], columns=columns)


class TrackAnalyzer:
    """Collects labelled tracks and compares them."""

    def __init__(self):
        """Initialize the analyzer."""
        self.tracks: Dict[str, List[TrackPoint]] = {}

    def add_track(self, label: str, track: List[TrackPoint]):
        """Add a track to analyze under ``label``."""
        self.tracks[label] = track

    def clear_tracks(self):
        """Clear all stored tracks."""
        self.tracks = {}

    def compare_tracks(self) -> Dict[str, Any]:
        """
        Compare all stored tracks.

        Returns:
            Dictionary with per-track summaries and the labels of the shortest,
            most compact and largest-turn tracks
        """
        if not self.tracks:
            return {}

        summaries = {label: summarize_track(track) for label, track in self.tracks.items()}
        return {
            "tracks": summaries,
            "shortest_duration": min(summaries, key=lambda k: summaries[k]["duration"]),
            "smallest_displacement": min(summaries, key=lambda k: summaries[k]["displacement"]),
            "largest_heading_change": max(summaries, key=lambda k: abs(summaries[k]["heading_change"])),
        }

    def get_statistics(self) -> Dict[str, Any]:
        """
        Statistical summary across all stored tracks.

        Returns:
            Dictionary with min/max/avg of duration, path length, displacement
            and final heading
        """
        if not self.tracks:
            return {}

        frame = pd.DataFrame([summarize_track(track) for track in self.tracks.values()])
        stats = {"num_tracks": len(self.tracks)}
        for column in ("duration", "path_length", "displacement", "final_heading"):
            stats[column] = {
                "min": float(frame[column].min()),
                "max": float(frame[column].max()),
                "avg": float(frame[column].mean()),
            }
        return stats

    def to_dataframe(self, label: Optional[str] = None) -> pd.DataFrame:
        """
        Track points as a DataFrame.

        Args:
            label: Track to export; all tracks with a ``label`` column if None
        """
        if label is not None:
            return track_to_dataframe(self.tracks[label])
        frames = []
        for name, track in self.tracks.items():
            frame = track_to_dataframe(track)
            frame.insert(0, "label", name)
            frames.append(frame)
        if not frames:
            return pd.DataFrame()
        return pd.concat(frames, ignore_index=True)

    def print_comparison(self):
        """Print a formatted comparison of all tracks."""
        if not self.tracks:
            print("No tracks to compare.")
            return

        print("=" * 80)
        print("GROUND TRACK COMPARISON")
        print("=" * 80)

        comparison = self.compare_tracks()
        for label, summary in comparison["tracks"].items():
            print(f"\nTrack: {label}")
            print("-" * 80)
            print(f"  Points:            {summary['points']}")
            print(f"  Duration:          {summary['duration']:.2f}s")
            print(f"  Heading Change:    {summary['heading_change']:.1f} deg")
            print(f"  Final Heading:     {summary['final_heading']:.1f} deg")
            print(f"  Max Bank:          {summary['max_bank']:.1f} deg")
            print(f"  Path Length:       {summary['path_length']:.3f} NM")
            print(f"  Displacement:      {summary['displacement']:.3f} NM")

        print("\n" + "=" * 80)
        print(f"  Shortest:          {comparison['shortest_duration']}")
        print(f"  Most Compact:      {comparison['smallest_displacement']}")
        print(f"  Largest Turn:      {comparison['largest_heading_change']}")
        print("=" * 80)

    def export_to_json(self, filepath: str):
        """
        Export summaries and statistics to a JSON file.

        Args:
            filepath: Path to output JSON file
        """
        data = {
            "comparison": self.compare_tracks(),
            "statistics": self.get_statistics(),
        }

        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def visualize(self, save_path: Optional[str] = None):
        """
        Plot all stored tracks over the ground and their headings over time.

        Args:
            save_path: Path to save the figure (if None, displays interactively)
        """
        import matplotlib.pyplot as plt

        if not self.tracks:
            print("No tracks to visualize.")
            return

        fig, (ground_ax, heading_ax) = plt.subplots(1, 2, figsize=(12, 6))

        for label, track in self.tracks.items():
            xs = [p.x for p in track]
            ys = [p.y for p in track]
            line, = ground_ax.plot(xs, ys, label=label)
            ground_ax.scatter(xs[-1:], ys[-1:], color=line.get_color(), marker='o', s=30)

            roll_out = [p for p in track if p.phase is TurnPhase.ROLL_OUT]
            if roll_out:
                ground_ax.scatter([roll_out[0].x], [roll_out[0].y], color=line.get_color(),
                                  marker='x', s=60)

            heading_ax.plot([p.time for p in track], [p.heading for p in track],
                            color=line.get_color(), label=label)

        ground_ax.scatter([0.0], [0.0], c='black', marker='^', s=80, label='Start')
        ground_ax.set_title("Ground Track")
        ground_ax.set_xlabel("East (NM)")
        ground_ax.set_ylabel("North (NM)")
        ground_ax.set_aspect('equal', adjustable='datalim')
        ground_ax.legend()
        ground_ax.grid(True, alpha=0.3)

        heading_ax.set_title("Heading")
        heading_ax.set_xlabel("Time (s)")
        heading_ax.set_ylabel("Heading (deg)")
        heading_ax.set_ylim(0, 360)
        heading_ax.grid(True, alpha=0.3)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
            plt.close(fig)
            print(f"Visualization saved to {save_path}")
        else:
            plt.show()
