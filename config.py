# Limits
MAX_PROCESS = 10

# Frame selection policies
POLICY_STACK = 'stack'    # most recently freed frame first
POLICY_QUEUE = 'queue'    # least recently freed frame first
POLICY_RANDOM = 'random'  # uniform among free frames
POLICIES = [POLICY_STACK, POLICY_QUEUE, POLICY_RANDOM]
DEFAULT_POLICY = POLICY_STACK

# Logging
LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s: %(message)s'
DEFAULT_LOG_LEVEL = 'WARNING'

# Charts
DEFAULT_CHART_FILE = 'frame_map.png'


class SimulatorConfig:
    def __init__(self, memory_size=None, frame_size=None, max_process_size=None,
                 policy=DEFAULT_POLICY, seed=None, max_processes=MAX_PROCESS,
                 log_level=DEFAULT_LOG_LEVEL):
        # Sizes left as None are asked for interactively
        self.memory_size = memory_size
        self.frame_size = frame_size
        self.max_process_size = max_process_size
        self.policy = policy
        self.seed = seed
        self.max_processes = max_processes
        self.log_level = log_level

    @classmethod
    def from_args(cls, args):
        return cls(
            memory_size=args.memory_size,
            frame_size=args.frame_size,
            max_process_size=args.max_process_size,
            policy=args.policy,
            seed=args.seed,
            max_processes=args.max_processes,
            log_level=args.log_level,
        )

    def __repr__(self):
        return (f"SimulatorConfig(memory_size={self.memory_size}, frame_size={self.frame_size}, "
                f"max_process_size={self.max_process_size}, policy={self.policy!r}, "
                f"seed={self.seed}, max_processes={self.max_processes})")
