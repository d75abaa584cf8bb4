from gym_goban import govars, notation


class Stone:
    """
    One intersection of the board. Allocated once per intersection; a stone
    "dies" and comes back by toggling its color and group link.
    """

    def __init__(self, goban, i, j, color=govars.EMPTY):
        self.goban = goban
        self.i = i
        self.j = j
        self.color = color
        # Handle of the owning group in the goban's arena
        self.group_id = None
        self.neighbors = []

    @property
    def group(self):
        if self.group_id is None:
            return None
        return self.goban.groups[self.group_id]

    def is_empty(self):
        return self.color == govars.EMPTY

    def is_on_board(self):
        return self.i >= 0 and self.j >= 0

    def empties(self):
        return [s for s in self.neighbors if s.color == govars.EMPTY]

    def unique_allies(self, color):
        allies = []
        for stone in self.neighbors:
            if stone.color == color:
                group = stone.group
                if group not in allies:
                    allies.append(group)
        return allies

    def unique_enemies(self, ally_color):
        """
        :return: the distinct opposite color groups touching this stone, in neighbor order
        """
        enemies = []
        for stone in self.neighbors:
            if stone.color != govars.EMPTY and stone.color != ally_color:
                group = stone.group
                if group not in enemies:
                    enemies.append(group)
        return enemies

    def die(self):
        self.color = govars.EMPTY
        self.group_id = None

    def resuscitate_in(self, group):
        self.group_id = group.ndx
        self.color = group.color

    def set_group_on_merge(self, group):
        # Pure relinking; liberties are handled by the merge itself
        self.group_id = group.ndx

    def as_move(self):
        if not self.is_on_board():
            return '--'
        return notation.coords_to_move(self.i, self.j)

    def __str__(self):
        return f'stone{govars.COLOR_CHARS[self.color]}:{self.as_move()}'

    def __repr__(self):
        return self.__str__()
