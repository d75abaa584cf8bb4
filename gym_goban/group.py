import logging
from typing import NamedTuple

from gym_goban import govars
from gym_goban.errors import GobanInvariantError

logger = logging.getLogger(__name__)


class Active(NamedTuple):
    pass


class MergedInto(NamedTuple):
    target: int
    cause: object


class Captured(NamedTuple):
    cause: object


ACTIVE = Active()


class Group:
    """
    A group keeps the list of its stones, the updated number of "lives" (empty
    intersections around) and the state needed to undo what happened to it
    (merged into another group, or captured).

    Stones are connected and disconnected as a stack: the last stone connected
    is always the first one disconnected.
    """

    def __init__(self, goban, ndx, stone, lives):
        self.goban = goban
        # Slot in the goban's arena; kept when the group is recycled
        self.ndx = ndx
        self.stones = [stone]
        self.lives = lives
        self.color = stone.color
        self.state = ACTIVE
        logger.debug('New group created %s', self)

    def recycle(self, stone, lives):
        self.stones.clear()
        self.stones.append(stone)
        self.lives = lives
        self.color = stone.color
        self.state = ACTIVE
        logger.debug('Use (new) recycled group %s', self)
        return self

    @classmethod
    def recycle_new(cls, goban, stone, lives):
        """
        Takes a retired group from the goban's garbage, or allocates a new slot.
        """
        if goban.garbage_groups:
            return goban.groups[goban.garbage_groups.pop()].recycle(stone, lives)
        group = cls(goban, len(goban.groups), stone, lives)
        goban.groups.append(group)
        return group

    @property
    def merged_with(self):
        if isinstance(self.state, MergedInto):
            return self.goban.groups[self.state.target]
        return None

    @property
    def merged_by(self):
        if isinstance(self.state, MergedInto):
            return self.state.cause
        return None

    @property
    def killed_by(self):
        if isinstance(self.state, Captured):
            return self.state.cause
        return None

    def is_active(self):
        return isinstance(self.state, Active)

    def is_alive(self):
        return self.is_active() and len(self.stones) > 0

    def lives_added_by_stone(self, stone):
        """
        Counts the lives of a stone that are not already lives of the group
        (the stone is being added or removed)
        """
        lives = 0
        for life in stone.neighbors:
            if life.color != govars.EMPTY:
                continue
            if not any(s.group_id == self.ndx and s is not stone for s in life.neighbors):
                lives += 1
        return lives

    def connect_stone(self, stone, on_merge=False):
        logger.debug('Connecting %s to group %s (on_merge=%s)', stone, self, on_merge)
        self.stones.append(stone)
        self.lives += self.lives_added_by_stone(stone)
        if not on_merge:
            # The connection itself fills one of our lives
            self.lives -= 1
        # Can be 0 when the stone is about to capture or to die
        if self.lives < 0:
            raise GobanInvariantError(f'Lives < 0 on connect: {self}')

    def disconnect_stone(self, stone, on_merge=False):
        """
        Reverse of connect_stone; a group losing its last stone goes to garbage.
        """
        logger.debug('Disconnecting %s from group %s (on_merge=%s)', stone, self, on_merge)
        if not self.stones or self.stones[-1] is not stone:
            raise GobanInvariantError(f'Disconnect order: {stone} is not the last stone of {self}')
        if len(self.stones) > 1:
            self.lives -= self.lives_added_by_stone(stone)
            if not on_merge:
                self.lives += 1
            if self.lives < 0:
                raise GobanInvariantError(f'Lives < 0 on disconnect: {self}')
        else:
            self.goban.retire_group(self)
        self.stones.pop()

    def attacked_by(self, stone):
        """
        When a new enemy stone appears next to this group
        """
        self.lives -= 1
        if self.lives <= 0:
            # lives < 0 raises in die_from
            self.die_from(stone)

    def attacked_by_resuscitated(self, stone):
        """
        When an enemy group reappears because of an undo; it never kills anything
        """
        self.lives -= 1
        logger.debug('%s attacked by resuscitated %s', self, stone)
        if self.lives < 1:
            raise GobanInvariantError(f'Lives < 1 on attack by resuscitated {stone}: {self}')

    def not_attacked_anymore(self, stone):
        self.lives += 1
        logger.debug('%s not attacked anymore by %s', self, stone)

    def merge(self, subgroup, by_stone):
        if subgroup is self or subgroup.color != self.color or not subgroup.is_active():
            raise GobanInvariantError(f'Invalid merge of {subgroup} into {self}')
        logger.debug('Merging subgroup:%s to main:%s', subgroup, self)
        for stone in subgroup.stones:
            stone.set_group_on_merge(self)
            self.connect_stone(stone, on_merge=True)
        subgroup.state = MergedInto(self.ndx, by_stone)
        self.goban.merged_groups.push(subgroup.ndx, by_stone)
        logger.debug('After merge: subgroup:%s main:%s', subgroup, self)

    def unmerge(self, subgroup):
        if subgroup.merged_with is not self:
            raise GobanInvariantError(f'Invalid unmerge of {subgroup} from {self}')
        logger.debug('Unmerging subgroup:%s from main:%s', subgroup, self)
        for stone in reversed(subgroup.stones):
            self.disconnect_stone(stone, on_merge=True)
            stone.set_group_on_merge(subgroup)
        subgroup.state = ACTIVE
        logger.debug('After unmerge: subgroup:%s main:%s', subgroup, self)

    def unmerge_from(self, stone, mark=0):
        """
        Undoes every merge this stone caused; must be called on the main group (stone.group).
        Entries at or below `mark` in the merged log are left alone.
        """
        log = self.goban.merged_groups
        while len(log) > mark:
            entry = log.top_caused_by(stone)
            if entry is None or self.goban.groups[entry.ndx].merged_with is not self:
                break
            log.pop()
            self.unmerge(self.goban.groups[entry.ndx])

    def die_from(self, killer_stone):
        """
        Called when the group has no more life left
        """
        logger.debug('Group dying: %s', self)
        if self.lives != 0:
            raise GobanInvariantError(f'Dying with {self.lives} lives: {self}')
        for stone in self.stones:
            for enemy in stone.unique_enemies(self.color):
                enemy.not_attacked_anymore(stone)
            stone.die()
        self.state = Captured(killer_stone)
        self.goban.killed_groups.push(self.ndx, killer_stone)
        logger.debug('Group dead: %s', self)

    def resuscitate(self):
        """
        Called when undo removes the killer stone of this group.
        A resuscitated group always comes back with a single life: the point
        its killer vacates.
        """
        self.state = ACTIVE
        self.lives = 1
        for stone in self.stones:
            stone.resuscitate_in(self)
            for enemy in stone.unique_enemies(self.color):
                enemy.attacked_by_resuscitated(stone)

    @classmethod
    def resuscitate_from(cls, killer_stone, goban, mark=0):
        """
        Revives the groups on top of the killed log that killer_stone killed,
        stopping at `mark` entries: older entries may name the same point, from
        a move that was never taken back (e.g. a suicide)
        """
        log = goban.killed_groups
        while len(log) > mark and log.top_caused_by(killer_stone) is not None:
            group = goban.groups[log.pop().ndx]
            logger.debug('Taking back %s so we resuscitate %s', killer_stone, group)
            group.resuscitate()

    def stones_dump(self):
        return ','.join(sorted(s.as_move() for s in self.stones))

    def __str__(self):
        s = f'{{group #{self.ndx} of {len(self.stones)} {govars.color_name(self.color)} stones ['
        s += ','.join(stone.as_move() for stone in self.stones)
        s += f'], lives:{self.lives}'
        if self.merged_with is not None:
            s += f' MERGED with #{self.merged_with.ndx}'
        if self.killed_by is not None:
            s += f' KILLED by {self.killed_by.as_move()}'
        return s + '}'

    def __repr__(self):
        return self.__str__()
