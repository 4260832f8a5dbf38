# main.py
import os
import time
import logging
import cProfile
import pstats
import argparse
import io
from datetime import datetime
from typing import Optional

import psutil # For memory monitoring

from config import config, ConfigurationError
from physics_utils import PhysicsError
from simulation_clock import SimulationClock
from scene import SolarSystemScene
from visualization import Visualization

class OrrerySimulation:
    """Runs the orrery: owns the scene, the optional window and the frame loop.

    Each frame processes input, advances the scene's clock by one frame,
    re-evaluates every body and renders. Without a window (`headless=True`) the
    loop only advances and evaluates, which is useful for profiling and for
    printing positions at a chosen date.

    Attributes:
        scene (SolarSystemScene): Bodies and the simulation clock.
        visualization (Visualization | None): Window and controls, `None` when headless.
        headless (bool): True when running without a window, including after a failed display.
        running (bool): Cleared by closing the window or by a critical error.
        process (psutil.Process): Current process, for memory monitoring.
    """
    def __init__(self, start_date: Optional[datetime] = None, headless: bool = False):
        try:
            clock = SimulationClock(start_date) if start_date is not None else SimulationClock.now()
            self.scene = SolarSystemScene(clock)
            self.visualization = None
            if not headless:
                self.visualization = Visualization()
                if not self.visualization.visualization_enabled:
                    logging.warning("Display could not be created. Falling back to a headless run.")
                    self.visualization.close()
                    self.visualization = None
                    headless = True
            self.headless = headless
        except (ConfigurationError, PhysicsError) as e:
            logging.critical(f"Failed to initialize OrrerySimulation: {e}", exc_info=True)
            raise

        self.running = True
        self.process = psutil.Process(os.getpid())
        logging.info(f"OrrerySimulation initialized ({'headless' if headless else 'windowed'}).")

    def check_memory(self, frame: int):
        try:
            memory_mb = self.process.memory_info().rss / (1024 * 1024)
            if memory_mb > config.Monitoring.MEMORY_USAGE_WARN_MB:
                logging.warning(f"High memory usage: {memory_mb:.2f} MB at frame {frame}")
            else:
                logging.debug(f"Memory usage: {memory_mb:.2f} MB at frame {frame}")
        except psutil.Error as e_psutil:
            logging.error(f"Could not retrieve memory usage: {e_psutil}", exc_info=True)

    def run(self, max_frames: Optional[int] = None) -> int:
        """
        Runs the frame loop until the window closes or `max_frames` frames have run.

        Returns:
            int: Number of frames advanced.
        """
        if max_frames is None and self.visualization is None:
            raise ValueError("A headless run needs a frame limit.")

        frame = 0
        last_time = time.perf_counter()
        fps = 0.0
        while self.running and (max_frames is None or frame < max_frames):
            if self.visualization is not None:
                if not self.visualization.handle_events(self.scene):
                    self.running = False
                    logging.info("Simulation stopped by user (visualization window closed).")
                    break

            self.scene.advance()
            frame += 1

            if self.visualization is not None:
                now = time.perf_counter()
                if now > last_time:
                    fps = 0.9 * fps + 0.1 / (now - last_time)
                last_time = now
                self.visualization.render(self.scene, fps)

            if frame % config.Monitoring.MEMORY_CHECK_INTERVAL_FRAMES == 0:
                self.check_memory(frame)

        logging.info(f"Ran {frame} frames; clock at {self.scene.clock.describe()}.")
        return frame

    def report_positions(self):
        """Logs the display-frame position of every planet and comet."""
        for state in self.scene.bodies:
            x, y, z = state.position
            logging.info(f"{state.name:<28} x={x:9.3f} y={y:9.3f} z={z:9.3f}")

    def close(self):
        if self.visualization is not None:
            self.visualization.close()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the Solar System orrery.")
    parser.add_argument(
        "--start-date",
        type=datetime.fromisoformat,
        default=None,
        help="Initial simulated date as ISO 8601 (e.g. 2000-01-01T12:00:00). Naive dates are UTC. Defaults to now."
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Stop after this many frames. Required with --headless."
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window and log body positions at the end."
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable profiling. Statistics will be saved to 'simulation_profile.prof'."
    )
    args = parser.parse_args(argv)
    if args.headless and args.frames is None:
        args.frames = int(config.Time.FRAMES_PER_SIM_DAY)
    if args.frames is not None and args.frames < 0:
        parser.error("--frames must be non-negative")
    return args


def main(argv=None):
    """Entry point: parses arguments, runs the orrery and writes profiling data if asked."""
    args = parse_args(argv)

    profiler = None
    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        logging.info("cProfile profiling enabled. Output will be saved to simulation_profile.prof upon completion.")

    simulation_instance = None
    try:
        simulation_instance = OrrerySimulation(start_date=args.start_date, headless=args.headless)
        frames = args.frames
        if frames is None and simulation_instance.headless:
            frames = int(config.Time.FRAMES_PER_SIM_DAY)
        simulation_instance.run(frames)
        if simulation_instance.headless:
            simulation_instance.report_positions()
    except ConfigurationError as e_config_main:
        logging.critical(f"Orrery could not be initialized or run due to a ConfigurationError: {e_config_main}", exc_info=True)
        print(f"FATAL CONFIGURATION ERROR: {e_config_main}. Check logs for details.")
        return 1
    except PhysicsError as e_physics_main:
        logging.critical(f"Orbital evaluation failed: {e_physics_main}", exc_info=True)
        print(f"FATAL PHYSICS ERROR: {e_physics_main}. Check logs for details.")
        return 1
    finally:
        if simulation_instance is not None:
            simulation_instance.close()
        if profiler:
            profiler.disable()
            stats_file = "simulation_profile.prof"
            try:
                profiler.dump_stats(stats_file)
                logging.info(f"Profiling data successfully saved to {stats_file}")
                s = io.StringIO()
                pstats.Stats(profiler, stream=s).sort_stats('cumulative').print_stats(15)
                logging.info(f"\n--- Top 15 Profiled Functions (Cumulative Time) ---\n{s.getvalue()}")
            except OSError as e_profile_dump:
                logging.error(f"Failed to save profiling data to {stats_file}: {e_profile_dump}", exc_info=True)

    logging.info("Orrery terminated.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
