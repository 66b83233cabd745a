import argparse

from config import POLICIES, DEFAULT_POLICY, MAX_PROCESS, DEFAULT_LOG_LEVEL, DEFAULT_CHART_FILE, SimulatorConfig
from errors import MemorySimulatorError
from generate_graphs import plot_frame_map
from log import logger, setup_logger
from memory_manager import MemoryManager

MENU = ("\nMenu:\n"
        "1. Display memory\n"
        "2. Create process\n"
        "3. Display page table\n"
        "4. Exit\n"
        "5. Destroy process\n"
        "6. Save frame map chart")


def format_frame(frame_num, data):
    return f"Frame {frame_num}: " + " ".join(f"{byte:02X}" for byte in data)


def format_memory_report(report):
    lines = [f"Free memory: {report.free_percentage:.2f}%"]
    for frame_num, data in enumerate(report.frames):
        lines.append(format_frame(frame_num, data))
    if report.wasted_bytes:
        lines.append(f"({report.wasted_bytes} bytes past the last frame are unused)")
    return "\n".join(lines)


def format_page_table(view):
    lines = [f"Page table of process {view.process_id} (Size: {view.size} bytes):"]
    for page_num, frame_num in view.entries:
        lines.append(f"Page {page_num} -> Frame {frame_num}")
    return "\n".join(lines)


class MemorySimulator:

    def __init__(self, config=None, input_fn=None, output_fn=None):
        self.config = config or SimulatorConfig()
        self.input = input_fn or input
        self.output = output_fn or print
        self.manager = MemoryManager(policy=self.config.policy, seed=self.config.seed,
                                     max_processes=self.config.max_processes)

    def read_int(self, prompt, positive=False):
        while True:
            raw = self.input(prompt)
            try:
                value = int(raw.strip())
            except ValueError:
                self.output(f"Invalid number: {raw!r}")
                continue
            if positive and value <= 0:
                self.output("Value must be a positive integer.")
                continue
            return value

    def configure(self):
        memory_size = self.config.memory_size or self.read_int("Physical memory size (bytes): ", positive=True)
        frame_size = self.config.frame_size or self.read_int("Frame/page size (bytes): ", positive=True)
        max_process_size = (self.config.max_process_size
                            or self.read_int("Maximum process size (bytes): ", positive=True))

        self.manager.initialize(memory_size, frame_size, max_process_size)
        wasted = memory_size % frame_size
        if wasted:
            self.output(f"Warning: frame size does not divide memory size, {wasted} bytes are unusable.")

    def display_memory(self):
        self.output(format_memory_report(self.manager.display_memory()))

    def create_process(self):
        process_id = self.read_int("Process ID: ")
        process_size = self.read_int("Process size (bytes): ", positive=True)
        self.manager.create_process(process_id, process_size)
        self.output(f"Process {process_id} created successfully.")

    def display_page_table(self):
        process_id = self.read_int("Process ID: ")
        self.output(format_page_table(self.manager.display_page_table(process_id)))

    def destroy_process(self):
        process_id = self.read_int("Process ID: ")
        process = self.manager.destroy_process(process_id)
        self.output(f"Process {process_id} destroyed, {process.num_pages} frames released.")

    def save_chart(self):
        filename = self.input(f"Chart file name [{DEFAULT_CHART_FILE}]: ").strip() or DEFAULT_CHART_FILE
        try:
            plot_frame_map(self.manager.display_memory(), filename)
        except (OSError, ValueError) as e:
            # Bad directory or an extension matplotlib cannot write
            self.output(f"Error: could not save chart to '{filename}': {e}")
            return
        self.output(f"Chart saved as '{filename}'")

    def handle_choice(self, choice):
        """
        Run one menu action. Returns False once the operator asks to exit.
        """
        actions = {
            '1': self.display_memory,
            '2': self.create_process,
            '3': self.display_page_table,
            '5': self.destroy_process,
            '6': self.save_chart,
        }
        if choice == '4':
            return False

        action = actions.get(choice)
        if action is None:
            self.output("Invalid option. Try again.")
            return True

        try:
            action()
        except MemorySimulatorError as e:
            self.output(f"Error: {e}")
        return True

    def run(self):
        try:
            self.configure()
            while True:
                self.output(MENU)
                choice = self.input("Choose an option: ").strip()
                if not self.handle_choice(choice):
                    break
        except EOFError:
            logger.info("Input closed, leaving the simulator")
        return self.manager


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Paged virtual memory simulator')
    parser.add_argument('--memory-size', type=int, help='physical memory size in bytes (skips the prompt)')
    parser.add_argument('--frame-size', type=int, help='frame/page size in bytes (skips the prompt)')
    parser.add_argument('--max-process-size', type=int, help='maximum process size in bytes (skips the prompt)')
    parser.add_argument('--policy', choices=POLICIES, default=DEFAULT_POLICY, help='frame selection policy')
    parser.add_argument('--seed', type=int, default=None, help='seed for random filler and the random policy')
    parser.add_argument('--max-processes', type=int, default=MAX_PROCESS, help='capacity of the process table')
    parser.add_argument('--log-level', default=DEFAULT_LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], type=str.upper)
    args = parser.parse_args(argv)

    for name in ('memory_size', 'frame_size', 'max_process_size', 'max_processes'):
        value = getattr(args, name)
        if value is not None and value <= 0:
            parser.error(f"--{name.replace('_', '-')} must be a positive integer")
    return args


def main(argv=None):
    config = SimulatorConfig.from_args(parse_args(argv))
    setup_logger(config.log_level)
    logger.debug("Starting with %r", config)

    simulator = MemorySimulator(config)
    try:
        simulator.run()
    except MemorySimulatorError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
