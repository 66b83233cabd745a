from collections import deque
import random

from config import POLICIES, POLICY_STACK, POLICY_QUEUE, POLICY_RANDOM, DEFAULT_POLICY
from errors import ConfigurationError, FrameReleaseError


class FramePool:

    def __init__(self, num_frames=0, policy=DEFAULT_POLICY, seed=None):
        if policy not in POLICIES:
            raise ConfigurationError(f"Unknown frame policy: {policy}")
        self.policy = policy
        self.rng = random.Random(seed)
        self.initialize(num_frames)

    def initialize(self, num_frames):
        self.num_frames = num_frames
        # is_free[i] is the membership bitmap, free_list holds the selection order
        self.is_free_map = [True] * num_frames
        if self.policy == POLICY_STACK:
            # Top of the stack is the end of the list, so frame 0 goes out first
            self.free_list = list(reversed(range(num_frames)))
        elif self.policy == POLICY_QUEUE:
            self.free_list = deque(range(num_frames))
        else:
            self.free_list = list(range(num_frames))

    def allocate(self):
        """
        Take one frame out of the pool.
        Returns None when no frame is available; the caller is responsible
        for giving back anything it already took.
        """
        if not self.free_list:
            return None

        if self.policy == POLICY_STACK:
            frame_num = self.free_list.pop()
        elif self.policy == POLICY_QUEUE:
            frame_num = self.free_list.popleft()
        else:
            # Swap the chosen frame to the end so removal stays O(1)
            index = self.rng.randrange(len(self.free_list))
            self.free_list[index], self.free_list[-1] = self.free_list[-1], self.free_list[index]
            frame_num = self.free_list.pop()

        self.is_free_map[frame_num] = False
        return frame_num

    def release(self, frame_num):
        if not 0 <= frame_num < self.num_frames:
            raise FrameReleaseError(f"Frame {frame_num} is out of range (0..{self.num_frames - 1})")
        if self.is_free_map[frame_num]:
            raise FrameReleaseError(f"Frame {frame_num} is already free")

        self.is_free_map[frame_num] = True
        self.free_list.append(frame_num)

    def is_free(self, frame_num):
        return 0 <= frame_num < self.num_frames and self.is_free_map[frame_num]

    def free_frames(self):
        return sorted(self.free_list)

    def free_count(self):
        return len(self.free_list)

    def total_count(self):
        return self.num_frames

    def __len__(self):
        return self.free_count()

    def __repr__(self):
        return f"FramePool(policy={self.policy!r}, free={self.free_count()}/{self.num_frames})"
