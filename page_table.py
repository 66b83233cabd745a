class PageTableEntry:
    def __init__(self, page_num, frame_num):
        self.page_num = page_num
        self.frame_num = frame_num

    def __iter__(self):
        # Lets an entry unpack as (page, frame)
        return iter((self.page_num, self.frame_num))

    def __eq__(self, other):
        if not isinstance(other, PageTableEntry):
            return NotImplemented
        return self.page_num == other.page_num and self.frame_num == other.frame_num

    def __repr__(self):
        return f"PageTableEntry(page={self.page_num}, frame={self.frame_num})"


class PageTable:
    def __init__(self, process_id):
        self.process_id = process_id
        self.entries = []

    def add_entry(self, frame_num):
        # Pages are numbered by position, the next page is always len(entries)
        entry = PageTableEntry(len(self.entries), frame_num)
        self.entries.append(entry)
        return entry

    def get_entry(self, page_num):
        return self.entries[page_num]

    def frames(self):
        return [entry.frame_num for entry in self.entries]

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)


class Process:
    def __init__(self, process_id, size, frame_size, page_table, logical_memory):
        self.process_id = process_id
        self.size = size
        self.num_pages = len(page_table)
        self.page_table = page_table
        self.logical_memory = bytes(logical_memory)
        # Bytes left unused at the end of the last frame
        self.internal_fragmentation = self.num_pages * frame_size - size

    def frames(self):
        return self.page_table.frames()

    def __repr__(self):
        return f"Process(id={self.process_id}, size={self.size}, pages={self.num_pages})"
