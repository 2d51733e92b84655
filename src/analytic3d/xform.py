## 3x3 matrix operations for rigid transforms in analytic3d

## Copyright (c) 2026 analytic3d contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from math import cos, sin, sqrt

from analytic3d import tolerance
from analytic3d.errors import degenerate

## A matrix is represented as a list of three three-element rows.  In
## a matrix, lists represent rows unless the transpose property is
## true.  Plain triples passed to mul() are treated as column vectors,
## so M.mul(v) computes Mv.

## Rotation matrices are orthonormal, so their inverse is the
## transpose; inverse() only falls back to the adjugate for general
## matrices.


def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))


def istriple(x):
    """ is ``x`` a list or tuple of three numbers"""
    return isinstance(x,(list,tuple)) and len(x) == 3 and \
        isgoodnum(x[0]) and isgoodnum(x[1]) and isgoodnum(x[2])


def dot3(a,b):
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]


class Matrix:
    """3x3 matrix class for rotations and frame orientations"""

    def __init__(self,a=None,trans=False):
        self.m = [[1.0,0.0,0.0],
                  [0.0,1.0,0.0],
                  [0.0,0.0,1.0]]
        self.trans=False

        if isinstance(a,Matrix):
            for i in range(3):
                self.setrow(i,a.getrow(i))

        elif isinstance(a,(tuple,list)):
            if len(a) == 3 and all(isinstance(r,(tuple,list)) for r in a):
                if not all(len(r) == 3 for r in a):
                    raise ValueError('bad row length in matrix initialization: {}'.format(a))
                for i in range(3):
                    for j in range(3):
                        x = a[i][j]
                        if isgoodnum(x):
                            self.m[i][j]=float(x)
                        else:
                            raise ValueError('bad element in matrix initialization: {}'.format(x))
            elif len(a) == 9:
                for i in range(3):
                    for j in range(3):
                        x = a[i*3+j]
                        if isgoodnum(x):
                            self.m[i][j]=float(x)
                        else:
                            raise ValueError('bad element in matrix initialization: {}'.format(x))
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not None:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        self.trans=trans

    @classmethod
    def identity(cls):
        return cls()

    @classmethod
    def from_columns(cls,c1,c2,c3):
        """build a matrix whose columns are the three given triples"""
        return cls([[c1[0],c2[0],c3[0]],
                    [c1[1],c2[1],c3[1]],
                    [c1[2],c2[2],c3[2]]])

    def __repr__(self):
        return "Matrix([{},{},{}])".format(self.getrow(0),self.getrow(1),
                                           self.getrow(2))

    def __eq__(self,other):
        if not isinstance(other,Matrix):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None

    def isclose(self,other,tol=None):
        """element-wise comparison within ``tol`` (defaults to the active
        tolerance)"""
        if tol is None:
            tol = tolerance.get_tolerance()
        for i in range(3):
            for j in range(3):
                if abs(self.get(i,j)-other.get(i,j)) > tol:
                    return False
        return True

    #return value indexed by i,j
    def get(self,i,j):
        if i < 0 or i > 2 or j < 0 or j > 2:
            raise ValueError('bad index passed to get: {},{}'.format(i,j))
        if self.trans:
            return self.m[j][i]
        else:
            return self.m[i][j]

    #set value indexed by i,j
    def set(self,i,j,x):
        if i < 0 or i > 2 or j < 0 or j > 2:
            raise ValueError('bad index passed to set: {},{}'.format(i,j))
        if isgoodnum(x):
            if self.trans:
                self.m[j][i]=x
            else:
                self.m[i][j]=x
        else:
            raise ValueError('bad value passed to set: {}'.format(x))

    def getrow(self,i):
        if i < 0 or i > 2:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        if self.trans:
            return [self.m[0][i],
                    self.m[1][i],
                    self.m[2][i]]
        else:
            return list(self.m[i])

    def getcol(self,j):
        if j < 0 or j > 2:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        if not self.trans:
            return [self.m[0][j],
                    self.m[1][j],
                    self.m[2][j]]
        else:
            return list(self.m[j])

    def setrow(self,i,x):
        if not istriple(x):
            raise ValueError('bad non-vector passed to setrow: {}'.format(x))
        if i < 0 or i > 2:
            raise ValueError('bad row index passed to setrow: {}'.format(i))
        if self.trans:
            self.m[0][i] = x[0]
            self.m[1][i] = x[1]
            self.m[2][i] = x[2]
        else:
            self.m[i] = list(x)

    def setcol(self,j,x):
        if not istriple(x):
            raise ValueError('bad non-vector passed to setcol: {}'.format(x))
        if j < 0 or j > 2:
            raise ValueError('bad column index passed to setcol: {}'.format(j))
        if not self.trans:
            self.m[0][j] = x[0]
            self.m[1][j] = x[1]
            self.m[2][j] = x[2]
        else:
            self.m[j] = list(x)

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # triple, compute Mx. If x is a scalar, compute xM.  Respects
    # transpose flag.

    def mul(self,x):
        if isinstance(x,Matrix):
            result = Matrix()
            for i in range(3):
                row = self.getrow(i)
                for j in range(3):
                    result.set(i,j,dot3(row,x.getcol(j)))
            return result
        elif istriple(x):
            return [dot3(self.getrow(i),x) for i in range(3)]
        elif isgoodnum(x):
            result = Matrix()
            for i in range(3):
                result.setrow(i,[v*x for v in self.getrow(i)])
            return result

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def transpose(self):
        """return a new transposed matrix"""
        return Matrix(self,True)

    def det(self):
        a = self.getrow(0)
        b = self.getrow(1)
        c = self.getrow(2)
        return a[0]*(b[1]*c[2]-b[2]*c[1]) - \
            a[1]*(b[0]*c[2]-b[2]*c[0]) + \
            a[2]*(b[0]*c[1]-b[1]*c[0])

    def inverse(self):
        """inverse by adjugate; singular matrices are degenerate input"""
        d = self.det()
        ## Hadamard bound: |det| <= product of the row lengths
        bound = 1.0
        for i in range(3):
            bound *= sqrt(dot3(self.getrow(i),self.getrow(i)))
        if bound == 0.0 or abs(d) <= tolerance.SMALL*bound:
            raise degenerate('singular matrix has no inverse')
        g = self.get
        adj = [[g(1,1)*g(2,2)-g(1,2)*g(2,1), g(0,2)*g(2,1)-g(0,1)*g(2,2), g(0,1)*g(1,2)-g(0,2)*g(1,1)],
               [g(1,2)*g(2,0)-g(1,0)*g(2,2), g(0,0)*g(2,2)-g(0,2)*g(2,0), g(0,2)*g(1,0)-g(0,0)*g(1,2)],
               [g(1,0)*g(2,1)-g(1,1)*g(2,0), g(0,1)*g(2,0)-g(0,0)*g(2,1), g(0,0)*g(1,1)-g(0,1)*g(1,0)]]
        return Matrix(adj).mul(1.0/d)

    def isorthonormal(self):
        """are the columns unit length and mutually orthogonal"""
        tol = max(tolerance.get_tolerance(),tolerance.SMALL)
        for i in range(3):
            ci = self.getcol(i)
            for j in range(i,3):
                expected = 1.0 if i == j else 0.0
                if abs(dot3(ci,self.getcol(j))-expected) > tol:
                    return False
        return True

    def isrotation(self):
        """orthonormal and right-handed"""
        return self.isorthonormal() and self.det() > 0.0


# return the generalized 3x3 arbitrary axis rotation matrix, angle in
# radians, right-handed about the axis
def rotation_matrix(axis,angle,inverse=False):
    ux, uy, uz = float(axis[0]), float(axis[1]), float(axis[2])
    m = sqrt(ux*ux+uy*uy+uz*uz)
    if m < tolerance.SMALL:
        raise degenerate('zero-length rotation axis not allowed')
    ux /= m
    uy /= m
    uz /= m

    if inverse:
        angle *= -1.0

    cang = cos(angle)
    cmin = 1.0-cang
    sang = sin(angle)

    ## Rodrigues' formula, cf. http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin-uz*sang, ux*uz*cmin+uy*sang],
         [uy*ux*cmin+uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang],
         [uz*ux*cmin-uy*sang, uz*uy*cmin+ux*sang, cang+uz*uz*cmin]]

    return Matrix(R)


__all__ = ["Matrix", "rotation_matrix", "isgoodnum", "istriple", "dot3"]
