import os
import json
import pandas as pd
from datetime import datetime
from typing import Any, Dict


class ExperimentLogger:
    def __init__(self, log_dir: str, experiment_name: str):
        """
        Initializes the logger for one run.

        Args:
            log_dir (str): The base directory for logs.
            experiment_name (str): A name for the run; a timestamp is appended.
        """
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.experiment_name = f"{experiment_name}_{self.timestamp}"
        self.run_dir = os.path.join(log_dir, self.experiment_name)
        self.logs = []

        os.makedirs(self.run_dir, exist_ok=True)

    def log_step(self, step: int, data: Dict[str, Any], verbose: bool = False):
        """
        Logs a single step of a game.

        Args:
            step (int): The move number (0 for the initial board).
            data (Dict[str, Any]): Step data; "step_type" is one of
                initial, roll, fall, rejected, finish, error.
            verbose (bool): Whether to print step information to console.
        """
        log_entry = {"step": step, "timestamp": datetime.now().isoformat(), **data}

        if verbose:
            step_type = data.get("step_type", "unknown")
            if step_type == "initial":
                print(f"🚀 Step {step}: Initial board captured")
            elif step_type == "roll":
                print(f"⚡ Step {step}: Rolled {data.get('direction', '?')}")
            elif step_type == "fall":
                print(f"💥 Step {step}: Fell off rolling {data.get('direction', '?')}")
            elif step_type == "rejected":
                print(f"⛔ Step {step}: Roll rejected ({data.get('error', '?')})")
            elif step_type == "error":
                print(f"❌ Step {step}: Error occurred")
                print(f"  🔍 Details: {data.get('error', 'Unknown error')}")

        self.logs.append(log_entry)

    def save_logs(self):
        """Saves all collected logs to a JSON file plus a text summary."""
        log_file = os.path.join(self.run_dir, "experiment_log.json")
        with open(log_file, "w") as f:
            json.dump(self.logs, f, indent=2, default=str)

        summary_file = os.path.join(self.run_dir, "summary.txt")
        self._create_summary_file(summary_file)

        print(f"📁 Logs saved to: {log_file}")
        print(f"📋 Summary saved to: {summary_file}")
        return log_file

    def _create_summary_file(self, summary_file: str):
        """Create a human-readable summary file."""
        rolls = len([log for log in self.logs if log.get("step_type") in ("roll", "fall")])
        matches = len([log for log in self.logs if log.get("step_type") == "roll" and log.get("matched")])
        rejected = len([log for log in self.logs if log.get("step_type") == "rejected"])
        errors_occurred = len([log for log in self.logs if log.get("step_type") == "error"])

        with open(summary_file, "w") as f:
            f.write(f"Experiment Summary: {self.experiment_name}\n")
            f.write("=" * 60 + "\n")
            f.write(f"Rolls: {rolls}\n")
            f.write(f"Matches: {matches}\n")
            f.write(f"Rejected Requests: {rejected}\n")
            f.write(f"Errors Occurred: {errors_occurred}\n")
            f.write("\nStep-by-step breakdown:\n")
            f.write("-" * 30 + "\n")

            for log in self.logs:
                step = log.get("step", "?")
                step_type = log.get("step_type", "unknown")

                if step_type == "initial":
                    f.write(f"Step {step}: Initial board (game {log.get('game_id', '?')})\n")
                elif step_type == "roll":
                    suffix = " (matched)" if log.get("matched") else ""
                    f.write(f"Step {step}: Roll {log.get('direction', '?')} to {log.get('position')}{suffix}\n")
                elif step_type == "fall":
                    f.write(f"Step {step}: Fell off rolling {log.get('direction', '?')}\n")
                elif step_type == "rejected":
                    f.write(f"Step {step}: Rejected {log.get('direction', '?')} - {log.get('error')}\n")
                elif step_type == "finish":
                    f.write(f"Step {step}: Finished - {log.get('status')} "
                            f"(efficiency {log.get('efficiency')}%, par {log.get('par_moves')})\n")
                elif step_type == "error":
                    f.write(f"Step {step}: ERROR - {log.get('error', 'Unknown')}\n")

    def save_results_to_excel(self, results: Dict[str, Any], excel_path: str):
        """
        Appends one summary row to an Excel file, creating it if needed.

        Args:
            results (Dict[str, Any]): A flat dictionary of run results.
            excel_path (str): The path to the output Excel file.
        """
        results_df = pd.DataFrame([results])

        if os.path.exists(excel_path):
            existing_df = pd.read_excel(excel_path)
            updated_df = pd.concat([existing_df, results_df], ignore_index=True)
        else:
            out_dir = os.path.dirname(excel_path)
            if out_dir:
                os.makedirs(out_dir, exist_ok=True)
            updated_df = results_df

        updated_df.to_excel(excel_path, index=False)
        print(f"Results saved to {excel_path}")
