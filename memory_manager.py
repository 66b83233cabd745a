import random

from config import MAX_PROCESS, DEFAULT_POLICY, POLICIES
from errors import (AddressOutOfRangeError, ConfigurationError, DuplicateProcessError,
                    InsufficientFramesError, InsufficientTotalMemoryError, InvalidProcessSizeError,
                    NotInitializedError, ProcessNotFoundError, RegistryFullError,
                    SizeExceedsLimitError)
from frame_pool import FramePool
from log import logger
from page_table import PageTable, Process


class PhysicalMemory:
    def __init__(self, size, frame_size):
        self.size = size
        self.frame_size = frame_size
        self.num_frames = size // frame_size
        # Bytes past the last whole frame can never be addressed
        self.wasted_bytes = size - self.num_frames * frame_size
        self.data = bytearray(size)
        # Each frame stores (process_id, page_num) or None if free
        self.frames = [None] * self.num_frames

    def allocate_frame(self, frame_num, process_id, page_num):
        self.frames[frame_num] = (process_id, page_num)

    def free_frame(self, frame_num):
        self.frames[frame_num] = None

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def write_frame(self, frame_num, data):
        if len(data) > self.frame_size:
            raise ValueError(f"{len(data)} bytes do not fit in a {self.frame_size} byte frame")
        base = frame_num * self.frame_size
        self.data[base:base + len(data)] = data

    def read_frame(self, frame_num):
        base = frame_num * self.frame_size
        return bytes(self.data[base:base + self.frame_size])

    def read(self, address, length):
        if address < 0 or length < 0 or address + length > self.size:
            raise AddressOutOfRangeError(
                f"Physical range {address}..{address + length - 1} is outside 0..{self.size - 1}")
        return bytes(self.data[address:address + length])


class Statistics:
    def __init__(self):
        self.processes_created = 0
        self.processes_destroyed = 0
        self.creations_rejected = 0
        self.frames_allocated = 0
        self.frames_released = 0

    def record_creation(self, num_pages):
        self.processes_created += 1
        self.frames_allocated += num_pages

    def record_rejection(self, rolled_back=0):
        self.creations_rejected += 1
        # Frames handed back during a rollback were allocated and released in the same call
        self.frames_allocated += rolled_back
        self.frames_released += rolled_back

    def record_destruction(self, num_pages):
        self.processes_destroyed += 1
        self.frames_released += num_pages

    def copy(self):
        stats = Statistics()
        stats.__dict__.update(self.__dict__)
        return stats

    def __str__(self):
        return (f"Processes Created: {self.processes_created}\n"
                f"Processes Destroyed: {self.processes_destroyed}\n"
                f"Creations Rejected: {self.creations_rejected}\n"
                f"Frames Allocated: {self.frames_allocated}\n"
                f"Frames Released: {self.frames_released}")


class MemoryReport:
    def __init__(self, num_frames, frame_size, free_frames, frames, owners, wasted_bytes, stats):
        self.num_frames = num_frames
        self.frame_size = frame_size
        self.free_frames = free_frames
        self.frames = frames
        self.owners = owners
        self.wasted_bytes = wasted_bytes
        self.stats = stats

    @property
    def free_percentage(self):
        if self.num_frames == 0:
            return 0.0
        return self.free_frames / self.num_frames * 100


class PageTableView:
    def __init__(self, process_id, size, entries):
        self.process_id = process_id
        self.size = size
        # List of (page_num, frame_num) in page order
        self.entries = entries

    def frames(self):
        return [frame_num for _, frame_num in self.entries]

    def __len__(self):
        return len(self.entries)


class MemoryManager:

    def __init__(self, policy=DEFAULT_POLICY, seed=None, max_processes=MAX_PROCESS):
        if policy not in POLICIES:
            raise ConfigurationError(f"Unknown frame policy: {policy}")
        if max_processes < 1:
            raise ConfigurationError(f"Maximum number of processes must be positive, got {max_processes}")
        self.policy = policy
        self.seed = seed
        self.max_processes = max_processes
        self.fill_rng = self._filler_rng()

        self.physical_memory = None
        self.frame_pool = None
        self.max_process_size = None
        self.registry = []
        self.stats = Statistics()

    def _filler_rng(self):
        # Filler gets its own stream, never the one the frame pool draws from
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:fill")

    @property
    def initialized(self):
        return self.physical_memory is not None

    def initialize(self, physical_memory_size, frame_size, max_process_size):
        if frame_size <= 0:
            raise ConfigurationError(f"Frame size must be positive, got {frame_size}")
        if physical_memory_size <= 0:
            raise ConfigurationError(f"Physical memory size must be positive, got {physical_memory_size}")
        if max_process_size <= 0:
            raise ConfigurationError(f"Maximum process size must be positive, got {max_process_size}")

        # Build everything first so a failure leaves the previous state intact
        physical_memory = PhysicalMemory(physical_memory_size, frame_size)
        frame_pool = FramePool(physical_memory.num_frames, policy=self.policy, seed=self.seed)

        self.physical_memory = physical_memory
        self.frame_pool = frame_pool
        self.max_process_size = max_process_size
        self.registry = []
        self.stats = Statistics()
        self.fill_rng = self._filler_rng()

        logger.info("Initialized %d bytes of memory as %d frames of %d bytes (policy=%s)",
                    physical_memory_size, self.num_frames, frame_size, self.policy)
        if self.physical_memory.wasted_bytes:
            logger.warning("%d bytes at the end of memory do not fill a frame and are unusable",
                           self.physical_memory.wasted_bytes)

    def _check_initialized(self):
        if not self.initialized:
            raise NotInitializedError()

    @property
    def num_frames(self):
        self._check_initialized()
        return self.physical_memory.num_frames

    @property
    def frame_size(self):
        self._check_initialized()
        return self.physical_memory.frame_size

    @property
    def processes(self):
        return tuple(self.registry)

    def free_count(self):
        self._check_initialized()
        return self.frame_pool.free_count()

    def find_process(self, process_id):
        for process in self.registry:
            if process.process_id == process_id:
                return process
        return None

    def get_process(self, process_id):
        self._check_initialized()
        process = self.find_process(process_id)
        if process is None:
            raise ProcessNotFoundError(process_id)
        return process

    def create_process(self, process_id, process_size):
        self._check_initialized()
        frame_size = self.physical_memory.frame_size

        # Every check here runs before the frame pool is touched
        if process_size < 1:
            raise self._reject(process_id, InvalidProcessSizeError(
                f"Process size must be positive, got {process_size}"))
        if process_size > self.max_process_size:
            raise self._reject(process_id, SizeExceedsLimitError(
                f"Process size {process_size} exceeds the maximum of {self.max_process_size} bytes"))

        num_pages = (process_size + frame_size - 1) // frame_size
        if num_pages > self.num_frames:
            raise self._reject(process_id, InsufficientTotalMemoryError(
                f"Process needs {num_pages} pages but memory only has {self.num_frames} frames"))
        if len(self.registry) >= self.max_processes:
            raise self._reject(process_id, RegistryFullError(
                f"Process table is full ({self.max_processes} processes)"))
        if self.find_process(process_id) is not None:
            raise self._reject(process_id, DuplicateProcessError(f"Process {process_id} already exists"))

        logical_memory = bytes(self.fill_rng.randrange(256) for _ in range(process_size))
        page_table = PageTable(process_id)

        for page_num in range(num_pages):
            frame_num = self.frame_pool.allocate()
            if frame_num is None:
                claimed = self._rollback(page_table)
                self.stats.record_rejection(rolled_back=claimed)
                logger.info("Process %s ran out of free frames at page %d/%d, returned %d frames",
                               process_id, page_num, num_pages, claimed)
                raise InsufficientFramesError(
                    f"Process needs {num_pages} frames but only {claimed} were free")

            page_table.add_entry(frame_num)

        # Frames are all claimed, so nothing below can fail halfway
        for page_num, frame_num in page_table:
            self.physical_memory.allocate_frame(frame_num, process_id, page_num)
            offset = page_num * frame_size
            self.physical_memory.write_frame(frame_num, logical_memory[offset:offset + frame_size])
            logger.debug("Process %s page %d -> frame %d", process_id, page_num, frame_num)

        process = Process(process_id, process_size, frame_size, page_table, logical_memory)
        self.registry.append(process)
        self.stats.record_creation(num_pages)
        logger.info("Created process %s (%d bytes, %d pages)", process_id, process_size, num_pages)
        return process

    def _reject(self, process_id, error):
        self.stats.record_rejection()
        logger.info("Rejected process %s: %s", process_id, error)
        return error

    def _rollback(self, page_table):
        for entry in page_table:
            self.frame_pool.release(entry.frame_num)
        return len(page_table)

    def destroy_process(self, process_id):
        process = self.get_process(process_id)
        for frame_num in process.frames():
            self.physical_memory.free_frame(frame_num)
            self.frame_pool.release(frame_num)
        self.registry.remove(process)
        self.stats.record_destruction(process.num_pages)
        logger.info("Destroyed process %s, released %d frames", process_id, process.num_pages)
        return process

    def display_memory(self):
        self._check_initialized()
        memory = self.physical_memory
        return MemoryReport(
            num_frames=memory.num_frames,
            frame_size=memory.frame_size,
            free_frames=self.frame_pool.free_count(),
            frames=[memory.read_frame(i) for i in range(memory.num_frames)],
            owners=list(memory.frames),
            wasted_bytes=memory.wasted_bytes,
            stats=self.stats.copy(),
        )

    def display_page_table(self, process_id):
        process = self.get_process(process_id)
        return PageTableView(process.process_id, process.size, [tuple(entry) for entry in process.page_table])

    def translate(self, process_id, logical_address):
        process = self.get_process(process_id)
        if not 0 <= logical_address < process.size:
            raise AddressOutOfRangeError(
                f"Logical address {logical_address} is outside process {process_id} (size {process.size})")
        frame_size = self.physical_memory.frame_size
        page_num, offset = divmod(logical_address, frame_size)
        return process.page_table.get_entry(page_num).frame_num * frame_size + offset

    def read_physical(self, address, length=1):
        self._check_initialized()
        return self.physical_memory.read(address, length)

    def internal_fragmentation(self):
        self._check_initialized()
        return sum(process.internal_fragmentation for process in self.registry)
